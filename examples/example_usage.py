"""Example: print today's reconciled report through the service layer (no Flask).

Controllers are a thin layer; the reconciliation logic lives in services.
"""

import importlib
import json

from config import get_settings_module

from work_reports.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, secret_key=settings.SECRET_KEY)
    today = container.report_service.today_reports()
    print(json.dumps(today.users, indent=2, ensure_ascii=False))
    print(today.diagnostics)


if __name__ == "__main__":
    main()
