"""Prepare the local database: create the data directory and apply migrations."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from workout_api.database import run_migrations
from workout_api.logging_config import configure_logging


def main() -> None:
    configure_logging()
    data_dir = Path("data")
    data_dir.mkdir(exist_ok=True)
    run_migrations()
    print("Database initialised at", data_dir)


if __name__ == "__main__":
    main()
