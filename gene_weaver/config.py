"""
config.py - 설정 관리
환경 변수(GENE_WEAVER_*) 또는 .env 파일에서 설정 로드
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 애플리케이션
    app_name: str = "Gene Weaver API"
    app_version: str = "1.0.0"
    debug: bool = False

    # 서버
    host: str = "0.0.0.0"
    port: int = 5000
    # 쉼표로 구분된 허용 origin 목록 (예: "http://a.test,http://b.test")
    cors_origins: str = "*"

    # 로깅
    log_level: str = "INFO"

    # 형질 미지정 요청의 기본 형질
    default_trait: str = "B"

    @property
    def cors_origin_list(self) -> List[str]:
        """CORS 허용 origin 목록"""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]

    class Config:
        env_prefix = "GENE_WEAVER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """캐시된 설정 객체 반환"""
    return Settings()
