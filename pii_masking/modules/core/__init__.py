"""핵심 도메인 모듈"""
