"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")
    movement_source: str = Field(..., description="Movement API 베이스 URL")


class MovementResponse(BaseModel):
    """대표 Movement 응답 (상세 조회용)"""

    id: int = Field(..., description="Movement ID")
    tire_id: int | None = Field(default=None, description="타이어 ID")
    serial_number: str = Field(..., description="시리얼 번호")
    size: str = Field(..., description="규격")
    brand: str = Field(..., description="브랜드")
    pattern: str | None = Field(default=None, description="패턴")
    movement_type: str = Field(..., description="이동 유형 (원본)")
    movement_date: str = Field(..., description="이동 일시 (ISO-8601, UTC)")
    user_name: str | None = Field(default=None, description="처리자")
    notes: str | None = Field(default=None, description="비고")
    reference_type: str | None = Field(default=None, description="참조 유형")
    reference_number: str | None = Field(default=None, description="참조 번호")
    document_number: str | None = Field(default=None, description="문서 번호")
    vehicle_id: int | None = Field(default=None, description="차량 ID")
    vehicle_number: str | None = Field(default=None, description="차량 번호")
    position: str | None = Field(default=None, description="장착 위치")
    supplier_id: int | None = Field(default=None, description="공급처 ID")
    supplier_name: str | None = Field(default=None, description="공급처")
    purchase_cost: str | None = Field(default=None, description="구매 단가")
    retread_cost: str | None = Field(default=None, description="재생 비용")
    disposal_reason: str | None = Field(default=None, description="폐기 사유")


class LedgerEntryResponse(BaseModel):
    """원장 항목 응답"""

    id: int = Field(..., description="대표 Movement ID")
    date: str = Field(..., description="거래 일시 (ISO-8601, UTC)")
    user_name: str = Field(..., description="처리자")
    location: str = Field(..., description="보관 위치")
    opening_stock: int = Field(..., description="기초 재고")
    quantity_in: int = Field(..., description="입고 수량")
    quantity_out: int = Field(..., description="출고 수량")
    closing_stock: int = Field(..., description="기말 재고")
    price: str | None = Field(default=None, description="가격 (없으면 null)")
    reference: str = Field(..., description="참조")
    document_no: str = Field(..., description="문서 번호")
    type: str = Field(..., description="거래 유형 라벨")
    movement_count: int = Field(..., description="그룹 내 Movement 수")
    movement: MovementResponse = Field(..., description="대표 Movement")


class LedgerSummaryResponse(BaseModel):
    """원장 합계 응답"""

    total_entries: int = Field(..., description="전체 항목 수")
    total_quantity_in: int = Field(..., description="입고 합계")
    total_quantity_out: int = Field(..., description="출고 합계")
    opening_stock: int = Field(..., description="기초 재고")
    closing_stock: int = Field(..., description="기말 재고")


class MovementStatsResponse(BaseModel):
    """이동 유형별 통계 응답"""

    movement_type: str = Field(..., description="이동 유형")
    count: int = Field(..., description="건수")
    unique_tires: int = Field(..., description="고유 타이어 수")


class LedgerSummaryDetailResponse(BaseModel):
    """합계 + 유형별 통계 응답"""

    summary: LedgerSummaryResponse
    stats: list[MovementStatsResponse] = Field(default_factory=list)
    skipped_records: int = Field(default=0, description="제외된 잘못된 레코드 수")


class LedgerResponse(BaseModel):
    """원장 조회 응답

    entries는 검색/정렬/페이지가 적용된 결과.
    summary는 요청 기간 전체 원장 기준.
    """

    entries: list[LedgerEntryResponse] = Field(default_factory=list)
    summary: LedgerSummaryResponse
    stats: list[MovementStatsResponse] = Field(default_factory=list)
    total_entries: int = Field(..., description="검색 적용 후 항목 수")
    page: int = Field(..., description="현재 페이지")
    limit: int = Field(..., description="페이지 크기")
    total_pages: int = Field(..., description="전체 페이지 수")
    skipped_records: int = Field(default=0, description="제외된 잘못된 레코드 수")
