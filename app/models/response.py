from typing import Dict, List, Optional

from pydantic import BaseModel


class FormatDescriptor(BaseModel):
    """Single available quality variant"""
    quality: str
    size: str


class VideoInfo(BaseModel):
    """Video information response"""
    success: bool = True
    title: str
    duration: str
    views: str
    thumbnail: Optional[str] = None
    author: Optional[str] = None
    formats: List[FormatDescriptor] = []


class ErrorResponse(BaseModel):
    error: str


class RootResponse(BaseModel):
    message: str
    status: str
    endpoints: Dict[str, str]


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class FullHealthResponse(HealthResponse):
    ytdlp_version: str
    js_runtime: Optional[str] = None
