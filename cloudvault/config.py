import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()

MIB = 1024 * 1024


class Config:
    SQLALCHEMY_DATABASE_URI     = os.getenv("DATABASE_URL", "sqlite:///cloudvault.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY              = os.getenv("JWT_SECRET_KEY")
    JWT_ACCESS_TOKEN_EXPIRES    = timedelta(seconds=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES", "3600")))
    BCRYPT_LOG_ROUNDS           = int(os.getenv("BCRYPT_LOG_ROUNDS", "12"))

    SECRET_KEY                  = os.getenv("FLASK_SECRET_KEY")
    DEBUG                       = os.getenv("FLASK_DEBUG") == "True"
    LOG_LEVEL                   = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS                = os.getenv("CORS_ORIGINS", "*")

    AWS_REGION                  = os.getenv("AWS_REGION") or None
    S3_BUCKET_NAME              = os.getenv("S3_BUCKET_NAME")
    S3_ENDPOINT_URL             = os.getenv("S3_ENDPOINT_URL") or None

    MAX_UPLOAD_BYTES            = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * MIB)))
    # room for the multipart envelope around the file itself
    MAX_CONTENT_LENGTH          = MAX_UPLOAD_BYTES + MIB
    DOWNLOAD_URL_EXPIRES        = int(os.getenv("DOWNLOAD_URL_EXPIRES", "3600"))

    SSL_CERT_FILE               = os.getenv("SSL_CERT_FILE")
    SSL_KEY_FILE                = os.getenv("SSL_KEY_FILE")
