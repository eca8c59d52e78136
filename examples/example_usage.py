"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
import json

from dotenv import load_dotenv

from config import get_settings_module

from ebd_tracker.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    summary = container.quarterly_aggregator.summarize()
    print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
