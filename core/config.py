"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class GrpcTlsSettings(BaseModel):
    enabled: bool = False
    cert: Optional[str] = None
    key: Optional[str] = None
    ca: Optional[str] = None


class GrpcSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100
    tls: GrpcTlsSettings = Field(default_factory=GrpcTlsSettings)


class VideoClientSettings(BaseModel):
    """Peer video service used by the comment service for existence checks."""
    target: str = "localhost:50052"
    # Per-call deadline in seconds; 0 or negative disables it
    timeout: float = 5.0
    tls: bool = False
    ca: Optional[str] = None


class MongoSettings(BaseModel):
    url: str = "mongodb://localhost:27017"
    database: str = "vidcomment"
    comment_collection: str = "comments"
    video_collection: str = "videos"
    server_selection_timeout_ms: int = 5000


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="vidcomment")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=True)
    ENVIRONMENT: str = Field(default="development")

    # 分组配置：Mongo / gRPC / 对端服务 采用嵌套模型
    mongo: MongoSettings = Field(default_factory=MongoSettings)
    # comment service listens on grpc, video service on video_grpc
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)
    video_grpc: GrpcSettings = Field(default_factory=lambda: GrpcSettings(port=50052))
    video_client: VideoClientSettings = Field(default_factory=VideoClientSettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    @field_validator("ENVIRONMENT", mode="before")
    @classmethod
    def _normalize_environment(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or "development"
        return v


settings = Settings()
