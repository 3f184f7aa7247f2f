"""공통 라이브러리 (로깅, 에러, 설정 로더)"""
