class MetadataExtractionError(ValueError):
    """Frontmatter could not be turned into a RawDocument."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to extract metadata: {detail}")
        self.detail = detail
