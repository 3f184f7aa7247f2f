"""기능 모듈 패키지"""
