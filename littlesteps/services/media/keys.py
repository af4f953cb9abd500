"""Composite media keys: ``{family_id}/{day_bucket}/{object_id}.{extension}``.

The family identifier is always the first segment, so a key can never name an
object outside the family that created it. The day bucket is the calendar day
of the owning event (``undated`` when no usable date was given) and the object
id is a random uuid4 hex, unique within any family and day.
"""

from dataclasses import dataclass
from datetime import date, datetime
import mimetypes
import re
from uuid import uuid4

from littlesteps.core.tenancy import TenantId

UNDATED_BUCKET = "undated"
DEFAULT_EXTENSION = "bin"

FAMILY_SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
DAY_BUCKET_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
EXTENSION_PATTERN = re.compile(r"^[a-z0-9]{1,10}$")


class InvalidMediaKey(ValueError):
    """Raised when a string does not have the shape of a media key."""


def day_bucket_for(moment: datetime | date | str | None) -> str:
    if moment is None:
        return UNDATED_BUCKET
    if isinstance(moment, (date, datetime)):
        return moment.strftime("%Y-%m-%d")
    try:
        return datetime.fromisoformat(moment.strip()).strftime("%Y-%m-%d")
    except ValueError:
        return UNDATED_BUCKET


def extension_for(filename: str | None, content_type: str | None) -> str:
    if filename and "." in filename:
        candidate = filename.rsplit(".", 1)[1].strip().lower()
        if EXTENSION_PATTERN.match(candidate):
            return candidate
    if content_type:
        guessed = mimetypes.guess_extension(content_type.split(";")[0].strip().lower())
        if guessed:
            candidate = guessed.lstrip(".")
            if EXTENSION_PATTERN.match(candidate):
                return candidate
    return DEFAULT_EXTENSION


@dataclass(frozen=True, slots=True)
class MediaKey:
    family_id: str
    day_bucket: str
    object_id: str
    extension: str

    def __post_init__(self) -> None:
        if not FAMILY_SEGMENT_PATTERN.match(self.family_id):
            raise InvalidMediaKey("Family segment contains unsupported characters.")
        if self.day_bucket != UNDATED_BUCKET and not DAY_BUCKET_PATTERN.match(self.day_bucket):
            raise InvalidMediaKey("Day bucket must be YYYY-MM-DD or 'undated'.")
        if not OBJECT_ID_PATTERN.match(self.object_id):
            raise InvalidMediaKey("Object id must be 32 lowercase hex characters.")
        if not EXTENSION_PATTERN.match(self.extension):
            raise InvalidMediaKey("Extension must be 1-10 lowercase alphanumerics.")

    @classmethod
    def build(
        cls,
        tenant: TenantId,
        moment: datetime | date | str | None,
        extension: str,
    ) -> "MediaKey":
        return cls(
            family_id=tenant.value,
            day_bucket=day_bucket_for(moment),
            object_id=uuid4().hex,
            extension=extension,
        )

    @classmethod
    def parse(cls, raw: str) -> "MediaKey":
        parts = raw.strip().strip("/").split("/")
        if len(parts) != 3:
            raise InvalidMediaKey("Media key must have exactly three segments.")
        family_id, day_bucket, filename = parts
        if filename.count(".") != 1:
            raise InvalidMediaKey("Media file name must be '<object_id>.<extension>'.")
        object_id, extension = filename.split(".")
        return cls(
            family_id=family_id,
            day_bucket=day_bucket,
            object_id=object_id,
            extension=extension,
        )

    @property
    def filename(self) -> str:
        return f"{self.object_id}.{self.extension}"

    def __str__(self) -> str:
        return f"{self.family_id}/{self.day_bucket}/{self.filename}"
