import argparse
import sys

from src.install_if_different.check import run_check
from src.install_if_different.domain.errors import MetadataError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Decide which objects of an update package need installing.")
    parser.add_argument("metadata", help="Path to the update package metadata JSON")
    parser.add_argument("--installation-set", type=int, default=0, help="Index of the active installation set")
    parser.add_argument("--root", default=None, help="Resolve object targets below this directory")
    parser.add_argument("--report", default=None, help="Write the JSON decision report to this path")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    args = parser.parse_args(argv)

    try:
        result = run_check(
            metadata_path=args.metadata,
            installation_set=args.installation_set,
            fs_root=args.root,
            output_report_path=args.report,
            show_progress=not args.no_progress,
        )
    except (MetadataError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for row in result.objects:
        if row.error is not None:
            print(f"{row.filename}\terror\t{row.error}")
        else:
            print(f"{row.filename}\t{'install' if row.proceed else 'skip'}\t{row.reason}")
    return 1 if result.error_count else 0


# python -m src.install_if_different path/to/metadata.json
if __name__ == "__main__":
    sys.exit(main())
