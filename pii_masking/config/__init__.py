"""설정 패키지 (Pydantic 스키마 + 기본 YAML)"""
