"""
认证相关的请求/响应模式
"""

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """凭证签发响应"""
    token: str = Field(description="JWT访问令牌")
