"""
Web 진입점

실행 방법:
    python -m web
    python -m web --host 0.0.0.0 --port 8080
"""

import argparse

import uvicorn

from core.constants import Defaults


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="타이어 재고 원장 API 서버")
    parser.add_argument("--host", default=Defaults.WEB_HOST)
    parser.add_argument("--port", type=int, default=Defaults.WEB_PORT)
    parser.add_argument(
        "--log-level",
        default=Defaults.LOG_LEVEL.lower(),
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn 로그 레벨",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
