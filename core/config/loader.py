"""
설정 로더

settings.yaml 로드 및 Movement API / 원장 / 표시 형식 설정 생성
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, MovementSourceEndpoints, Paths
from core.ledger.types import GroupingStrictness

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MovementSourceConfig:
    """Movement API 연결 설정"""

    base_url: str = MovementSourceEndpoints.DEFAULT_BASE_URL
    timeout: float = Defaults.REQUEST_TIMEOUT_SEC
    page_size: int = Defaults.PAGE_SIZE
    max_pages: int = Defaults.MAX_PAGES
    max_retries: int = Defaults.MAX_RETRIES


@dataclass(frozen=True)
class LedgerConfig:
    """원장 계산 설정"""

    location: str = Defaults.LOCATION
    grouping_strictness: GroupingStrictness = GroupingStrictness.LENIENT


@dataclass(frozen=True)
class PresentationConfig:
    """표시 형식 설정 (CSV/리포트 소비자에 명시적으로 전달)

    원장 계산 코어는 이 설정을 참조하지 않음.
    """

    currency_symbol: str = Defaults.CURRENCY_SYMBOL
    currency_decimals: int = Defaults.CURRENCY_DECIMALS
    date_format: str = Defaults.DATE_FORMAT


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 전체 설정 (불변)"""

    movement_source: MovementSourceConfig = field(default_factory=MovementSourceConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    presentation: PresentationConfig = field(default_factory=PresentationConfig)


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """YAML 섹션 조회 (없으면 빈 dict)"""
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션 형식이 잘못되었습니다")
    return section


def _positive_int(section: dict[str, Any], key: str, default: int, name: str) -> int:
    value = section.get(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"{name}.{key} 값이 정수가 아닙니다: {value!r}") from e
    if number < 1:
        raise SettingsLoadError(f"{name}.{key}는 1 이상이어야 합니다: {number}")
    return number


def parse_settings(data: dict[str, Any]) -> AppConfig:
    """YAML dict → AppConfig

    Raises:
        SettingsLoadError: 값이 잘못된 경우 (grouping_strictness, 음수 currency_decimals 포함)
    """
    source = _section(data, "movement_source")
    ledger = _section(data, "ledger")
    presentation = _section(data, "presentation")

    try:
        timeout = float(source.get("timeout", Defaults.REQUEST_TIMEOUT_SEC))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(
            f"movement_source.timeout 값이 숫자가 아닙니다: {source.get('timeout')!r}"
        ) from e

    source_config = MovementSourceConfig(
        base_url=str(source.get("base_url", MovementSourceEndpoints.DEFAULT_BASE_URL)),
        timeout=timeout,
        page_size=_positive_int(source, "page_size", Defaults.PAGE_SIZE, "movement_source"),
        max_pages=_positive_int(source, "max_pages", Defaults.MAX_PAGES, "movement_source"),
        max_retries=_positive_int(source, "max_retries", Defaults.MAX_RETRIES, "movement_source"),
    )

    # grouping_strictness 검증
    strictness_str = str(ledger.get("grouping_strictness", GroupingStrictness.LENIENT.value))
    try:
        strictness = GroupingStrictness(strictness_str.upper())
    except ValueError as e:
        valid = [s.value for s in GroupingStrictness]
        raise SettingsLoadError(
            f"유효하지 않은 grouping_strictness입니다: '{strictness_str}'. "
            f"유효한 값: {valid}"
        ) from e

    ledger_config = LedgerConfig(
        location=str(ledger.get("location", Defaults.LOCATION)),
        grouping_strictness=strictness,
    )

    decimals = presentation.get("currency_decimals", Defaults.CURRENCY_DECIMALS)
    try:
        decimals = int(decimals)
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(
            f"presentation.currency_decimals 값이 정수가 아닙니다: {decimals!r}"
        ) from e
    if decimals < 0:
        raise SettingsLoadError(
            f"presentation.currency_decimals는 0 이상이어야 합니다: {decimals}"
        )

    presentation_config = PresentationConfig(
        currency_symbol=str(presentation.get("currency_symbol", Defaults.CURRENCY_SYMBOL)),
        currency_decimals=decimals,
        date_format=str(presentation.get("date_format", Defaults.DATE_FORMAT)),
    )

    return AppConfig(
        movement_source=source_config,
        ledger=ledger_config,
        presentation=presentation_config,
    )


def load_settings(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    파일이 없으면 기본 설정 사용.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 형식이나 값이 잘못된 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        logger.info(f"settings.yaml 없음, 기본 설정 사용: {path}")
        return AppConfig()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AppConfig()

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    return parse_settings(data)


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_settings(settings_path)

    @property
    def config(self) -> AppConfig:
        """전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def movement_source(self) -> MovementSourceConfig:
        """Movement API 설정"""
        return self.config.movement_source

    @property
    def ledger(self) -> LedgerConfig:
        """원장 설정"""
        return self.config.ledger

    @property
    def presentation(self) -> PresentationConfig:
        """표시 형식 설정"""
        return self.config.presentation

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
