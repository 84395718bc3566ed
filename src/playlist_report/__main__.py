"""Module entrypoint for `python -m playlist_report`."""

from playlist_report.cli.app import main


if __name__ == "__main__":  # pragma: no cover - exercised via CLI tests
    main()
