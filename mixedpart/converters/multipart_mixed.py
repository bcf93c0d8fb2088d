"""HTTP message converter reading multipart/mixed bodies."""

from mixedpart.core.errors import UnsupportedOperationError
from mixedpart.core.logger import LogIcon, logger
from mixedpart.decoder.pipeline import DecodePipeline
from mixedpart.models.core import MULTIPART_MIXED, MediaType, ResultCollection

class MultipartMixedConverter:
    """Reads ``multipart/mixed`` request bodies into a ResultCollection.

    Writing is not supported: outbound messages of this type must not be
    routed through the converter.
    """

    def __init__(self, pipeline: DecodePipeline | None = None) -> None:
        self.pipeline = pipeline or DecodePipeline()

    @property
    def supported_media_types(self) -> list[MediaType]:
        return []

    def can_read(self, media_type: MediaType | str | None) -> bool:
        """Check whether the declared media type is exactly multipart/mixed."""
        if media_type is None:
            return False
        if isinstance(media_type, str):
            media_type, _, _ = media_type.partition(";")
            main, _, sub = media_type.strip().partition("/")
            return main.lower() == MULTIPART_MIXED.type and sub.strip().lower() == MULTIPART_MIXED.subtype
        return media_type.matches(MULTIPART_MIXED)

    def read(
        self,
        media_type: MediaType | str | None,
        body: bytes | str,
        charset: str | None = None,
    ) -> ResultCollection:
        """Decode the body.

        Raises:
            ConfigurationError: if the content type declares no boundary.
        """
        return self.pipeline.decode(media_type, body, charset)

    def can_write(self, media_type: MediaType | str | None = None) -> bool:
        return False

    def write(self, parts: ResultCollection, media_type: MediaType | str | None = None) -> None:
        logger.warning("Refusing to encode multipart/mixed body", icon=LogIcon.FORBIDDEN)
        raise UnsupportedOperationError("Encoding multipart/mixed bodies is not supported")
