"""
로깅 설정

Web 서버와 CLI 내보내기 스크립트가 공유하는 루트 로거 구성.
- 콘솔: stdout, 기본 INFO
- 파일: logs/<process>/<process>.log, 자정마다 교체 (7일 보관)

사용법:
    from core.logging import setup_logging
    setup_logging("web")
    setup_logging("cli", level="DEBUG")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Defaults, Paths

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# 요청/연결 단위로 로그를 쏟아내는 서드파티 로거 (WARNING으로 낮춤)
NOISY_LOGGERS = [
    "httpcore",
    "httpx",
    "asyncio",
    "uvicorn.access",
]

_PROCESS_LOG_DIRS = {
    "web": Paths.WEB_LOGS_DIR,
    "cli": Paths.CLI_LOGS_DIR,
}


def resolve_level(level: int | str) -> int:
    """로그 레벨 이름/숫자 → 숫자

    Raises:
        ValueError: 알 수 없는 레벨 이름
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"알 수 없는 로그 레벨: '{level}'")
    return resolved


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """프로세스별 로그 파일 경로 (web/cli 외에는 logs/ 바로 아래)"""
    directory = log_dir or _PROCESS_LOG_DIRS.get(process_name, Paths.LOGS_DIR)
    return directory / f"{process_name}.log"


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"  # cli.log.2026-10-18
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    process_name: str,
    level: int | str = Defaults.LOG_LEVEL,
    file_level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거 초기화

    호출할 때마다 기존 핸들러를 닫고 교체하므로 여러 번 호출해도 중복 출력 없음.

    Args:
        process_name: "web" 또는 "cli" (로그 디렉토리/파일 이름 결정)
        level: 콘솔 레벨 (이름 또는 숫자)
        file_level: 파일 레벨 (None이면 level과 동일)
        log_dir: 로그 디렉토리 (None이면 프로세스별 기본 경로)

    Returns:
        루트 Logger

    Raises:
        ValueError: 알 수 없는 레벨 이름
    """
    console_level = resolve_level(level)
    file_level = console_level if file_level is None else resolve_level(file_level)
    log_file = get_log_file_path(process_name, log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(console_level, file_level))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root_logger.addHandler(_console_handler(console_level, formatter))
    root_logger.addHandler(_file_handler(log_file, file_level, formatter))

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(
        f"로깅 초기화 완료: {process_name} "
        f"(console={logging.getLevelName(console_level)}, file={log_file})"
    )
    return root_logger
