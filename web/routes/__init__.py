"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- ledger: 재고 원장 API (조회, 합계, CSV, 인쇄 리포트)
"""
