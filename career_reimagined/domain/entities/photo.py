from dataclasses import dataclass, field


@dataclass(frozen=True)
class UploadedPhoto:
    data: bytes = field(repr=False)
    mime_type: str
    filename: str = "upload"

    @property
    def size(self) -> int:
        return len(self.data)
