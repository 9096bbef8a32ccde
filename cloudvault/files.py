"""
File transfer: uploads, listings, download links and deletion.

The bytes live in the object store and the metadata in ``file_records``; the
two are written and removed together. On upload the object goes first and is
removed again if the row cannot be committed, so a failure never leaves an
orphaned object behind.
"""

import uuid

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.utils import secure_filename

from cloudvault.errors import NotFoundError, StorageError, TooLarge, UnsupportedType, ValidationError
from cloudvault.extensions import db
from cloudvault.models import FileRecord
from cloudvault.object_store import get_object_store
from cloudvault.sanitizer import sanitize

ALLOWED_MIME_PREFIXES = (
    "image/",
    "application/pdf",
    "text/",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


MIME_TYPE_MAX = 255


def is_allowed_type(mime_type):
    return (
        bool(mime_type)
        and len(mime_type) <= MIME_TYPE_MAX
        and mime_type.lower().startswith(ALLOWED_MIME_PREFIXES)
    )


def make_storage_key(user_id, name):
    safe_name = secure_filename(name) or "file"
    return f"{user_id}/{uuid.uuid4()}-{safe_name}"


def upload(user_id, stream, name, mime_type, size):
    limit = current_app.config["MAX_UPLOAD_BYTES"]
    if size > limit:
        raise TooLarge()
    if not is_allowed_type(mime_type):
        raise UnsupportedType(f"File type '{(mime_type or '')[:100]}' is not allowed")

    display_name = sanitize(name or "")[:255]
    if not display_name:
        raise ValidationError("File name is required")

    store = get_object_store()
    key = make_storage_key(user_id, display_name)
    store.put(stream, key, mime_type)

    record = FileRecord(
        user_id=user_id,
        file_name=display_name,
        storage_key=key,
        size=size,
        mime_type=mime_type,
    )
    try:
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Saving metadata for {key} failed, removing object: {e}")
        try:
            store.delete(key)
        except StorageError:
            current_app.logger.error(f"Orphaned object left in storage: {key}")
        raise StorageError("File upload failed")

    current_app.logger.info(f"User {user_id} uploaded {key} ({size} bytes)")
    return record


def list_owned(user_id):
    return (
        FileRecord.query
        .filter_by(user_id=user_id)
        .order_by(FileRecord.created_at.desc(), FileRecord.id.desc())
        .all()
    )


def get_owned(user_id, file_id):
    record = FileRecord.query.filter_by(id=file_id, user_id=user_id).first()
    if record is None:
        raise NotFoundError("File not found")
    return record


def get_download_handle(user_id, file_id):
    record = get_owned(user_id, file_id)
    expires_in = current_app.config["DOWNLOAD_URL_EXPIRES"]
    url = get_object_store().presigned_download_url(record.storage_key, record.file_name, expires_in)
    return {"downloadUrl": url, "fileName": record.file_name, "expiresIn": expires_in}


def delete(user_id, file_id):
    record = get_owned(user_id, file_id)
    key = record.storage_key

    get_object_store().delete(key)
    try:
        db.session.delete(record)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        # S3 deletes are idempotent, so retrying the request finishes the job
        current_app.logger.error(f"Object {key} deleted but its record {file_id} was not: {e}")
        raise StorageError("Failed to delete file")

    current_app.logger.info(f"User {user_id} deleted {key}")
