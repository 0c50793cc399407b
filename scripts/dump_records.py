#!/usr/bin/env python
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.client import DOMAIN_PATHS, ErpApiClient
from backend.core.errors import ApiError, NetworkError, NotFound


def main() -> int:
    parser = argparse.ArgumentParser(description="Print records of one domain from a running ERP admin API")
    parser.add_argument("domain", choices=sorted(DOMAIN_PATHS), help="record domain")
    parser.add_argument("--id", dest="record_id", help="fetch a single record")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--token", default=None, help="bearer token")
    parser.add_argument("--filter", action="append", default=[], metavar="KEY=VALUE", help="list filter")
    args = parser.parse_args()

    filters = dict(item.split("=", 1) for item in args.filter if "=" in item)
    with ErpApiClient(args.base_url, token=args.token) as client:
        try:
            if args.record_id:
                data = client.get(args.domain, args.record_id)
            else:
                data = client.list(args.domain, **filters)
        except NotFound as exc:
            print(str(exc), file=sys.stderr)
            return 1
        except (NetworkError, ApiError) as exc:
            print(f"request failed: {exc}", file=sys.stderr)
            return 2

    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
