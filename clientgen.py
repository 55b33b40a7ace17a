#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from typing import Any, Dict, List

from clientgen_lib import (
    GeneratorConfiguration,
    generate,
    get_generator,
    list_generators,
    load_config,
    load_description,
    parse_params,
)
from clientgen_lib.specialization import CSHARP_CONSOLA


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate API client sources from templates, optionally through a specialization."
    )
    parser.add_argument(
        "-l",
        "--lang",
        default=CSHARP_CONSOLA,
        help=f"Generator name (default: {CSHARP_CONSOLA}). Use --list to see all.",
    )
    parser.add_argument(
        "-o",
        "--out",
        default=os.path.join(os.getcwd(), "generated"),
        help="Output directory (default: ./generated)",
    )
    parser.add_argument("-c", "--config", help="YAML or JSON file with generator configuration")
    parser.add_argument("-i", "--input", help="YAML or JSON API description (info, apis, models)")
    parser.add_argument(
        "-t",
        "--template-dir",
        help="Directory with user templates, checked before the embedded ones",
    )
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        help=(
            "Configuration property. Repeatable. Accepts key=value or key:value. "
            "Example: -p packageName=MyApi -p clientPackage=Client"
        ),
    )
    parser.add_argument(
        "--variant",
        help=f"Variant of the {CSHARP_CONSOLA} generator: full (default) or minimal",
    )
    parser.add_argument("--dry-run", action="store_true", help="List the files that would be generated")
    parser.add_argument("--list", action="store_true", help="List available generators and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.list:
        for name in list_generators():
            print(name)
        return 0

    try:
        params = parse_params(args.param)
    except Exception as e:
        print(f"Error parsing parameters: {e}", file=sys.stderr)
        return 2

    if args.variant and args.lang != CSHARP_CONSOLA:
        print(f"--variant only applies to {CSHARP_CONSOLA}", file=sys.stderr)
        return 2

    try:
        if args.config:
            config = load_config(args.config, params)
        else:
            config = GeneratorConfiguration(params)
        kwargs: Dict[str, Any] = {"config": config, "template_dir": args.template_dir}
        if args.input:
            kwargs["description"] = load_description(args.input)
        if args.variant:
            kwargs["variant"] = args.variant
        generator = get_generator(args.lang, **kwargs)
        paths = generate(generator, args.out, dry_run=args.dry_run)
    except KeyError as e:
        # KeyError str() quotes its message; print the message itself
        print(f"Generation failed: {e.args[0] if e.args else e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        for path in paths:
            print(path)
        return 0

    print(f"Generation completed. {len(paths)} file(s) written to: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
