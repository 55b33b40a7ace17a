import logging
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

logger = logging.getLogger(__name__)


class SupportingFile(NamedTuple):
    """One file scheduled for generation: template -> folder/destination_filename."""

    template_file: str
    folder: str
    destination_filename: str
    context: Optional[Dict[str, Any]] = None


class OutputManifest:
    """Ordered, append-only collection of SupportingFile entries for a run."""

    def __init__(self) -> None:
        self._entries: List[SupportingFile] = []

    def add(self, entry: SupportingFile) -> None:
        logger.debug(
            "Manifest += %s -> %s/%s", entry.template_file, entry.folder, entry.destination_filename
        )
        self._entries.append(entry)

    def __iter__(self) -> Iterator[SupportingFile]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> SupportingFile:
        return self._entries[index]

    def entries(self) -> List[SupportingFile]:
        return list(self._entries)
