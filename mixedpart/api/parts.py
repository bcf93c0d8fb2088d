"""Endpoints decoding multipart/mixed uploads."""

import hashlib

from pydantic import BaseModel

from mixedpart.core.logger import LogIcon, logger
from mixedpart.core.router import Router
from mixedpart.models.core import ResultCollection

router = Router(__file__, prefix="/parts")


class PartSummary(BaseModel):
    """Description of one decoded artifact."""

    name: str
    size: int
    sha256: str


class DecodeResponse(BaseModel):
    """Artifacts decoded from a multipart/mixed body."""

    count: int
    parts: list[PartSummary]


@router.post("/decode")
async def decode_parts(parts: ResultCollection) -> DecodeResponse:
    """Decode a multipart/mixed body and describe the recovered files."""
    summaries = [
        PartSummary(
            name=artifact.filename,
            size=artifact.content_length(),
            sha256=hashlib.sha256(artifact.read()).hexdigest(),
        )
        for artifact in parts.artifacts()
    ]
    logger.info("Decoded multipart upload", icon=LogIcon.UPLOAD, parts=len(summaries))
    return DecodeResponse(count=len(summaries), parts=summaries)
