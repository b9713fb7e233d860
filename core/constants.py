"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class MovementSourceEndpoints:
    """Movement API 엔드포인트 (재고 이동 원천 백엔드)"""

    DEFAULT_BASE_URL: str = "http://localhost:5000"

    ALL_MOVEMENTS: str = "/api/movements"
    TIRE_MOVEMENTS: str = "/api/movements/tire/{tire_id}"
    SIZE_MOVEMENTS: str = "/api/movements/size/{size}"


class Defaults:
    """기본값 상수"""

    # 원장 기본값 (누락 필드 대체)
    LOCATION: str = "MAIN_WAREHOUSE"
    USER_NAME: str = "System"
    UNKNOWN: str = "Unknown"

    # Movement API 조회
    PAGE_SIZE: int = 50
    MAX_PAGES: int = 1000
    REQUEST_TIMEOUT_SEC: float = 30.0
    MAX_RETRIES: int = 3

    # 표시 형식
    CURRENCY_SYMBOL: str = "$"
    CURRENCY_DECIMALS: int = 0
    DATE_FORMAT: str = "%m/%d/%Y %H:%M:%S"

    # 조회 기간 (일)
    LOOKBACK_DAYS: int = 30

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"
    CLI_LOGS_DIR: Path = LOGS_DIR / "cli"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # 템플릿
    TEMPLATES_DIR: Path = PROJECT_ROOT / "web" / "templates"
