"""
probe-service command line.

Usage:
  python -m probe_service                 # serve (default)
  python -m probe_service serve
  python -m probe_service healthcheck     # exit 0 if /health/liveness answers 200
  python -m probe_service healthcheck --url http://host:5000/health/liveness
"""
import argparse
import sys
from typing import List, Optional
from probe_service.core.config import settings
from probe_service.core.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="probe-service", description="Minimal HTTP probe service")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", help="Run the HTTP server (default)")
    hc = sub.add_parser("healthcheck", help="Check liveness of a running instance")
    hc.add_argument("--url", default=None, help="Liveness URL (default: http://HEALTHCHECK_HOST:PORT/health/liveness)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings)

    if args.command == "healthcheck":
        from probe_service.healthcheck import run_healthcheck
        return run_healthcheck(settings, url=args.url)

    from probe_service.server import run
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
