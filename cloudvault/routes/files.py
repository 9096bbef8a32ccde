import os

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from cloudvault import files
from cloudvault.credentials import current_principal
from cloudvault.errors import ValidationError
from cloudvault.schemas import FileRecordSchema

files_bp = Blueprint('files', __name__, url_prefix='/api/files')

file_schema = FileRecordSchema()


def _stream_size(stream):
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


@files_bp.route('/upload', methods=['POST'])
@jwt_required()
def upload():
    # werkzeug spools anything but tiny uploads to a temp file, so the
    # stream below is read from disk, not held in memory
    file = request.files.get('file')
    if not file or not file.filename:
        raise ValidationError("No file uploaded")

    record = files.upload(
        current_principal().user_id,
        file.stream,
        file.filename,
        file.mimetype,
        _stream_size(file.stream),
    )
    return jsonify({"message": "File uploaded", "file": file_schema.dump(record)}), 200


@files_bp.route('/my', methods=['GET'])
@jwt_required()
def my_files():
    records = files.list_owned(current_principal().user_id)
    return jsonify(file_schema.dump(records, many=True)), 200


@files_bp.route('/download/<int:file_id>', methods=['GET'])
@jwt_required()
def download(file_id):
    handle = files.get_download_handle(current_principal().user_id, file_id)
    return jsonify(handle), 200


@files_bp.route('/<int:file_id>', methods=['DELETE'])
@jwt_required()
def delete(file_id):
    files.delete(current_principal().user_id, file_id)
    return jsonify({"message": "File deleted successfully"}), 200
