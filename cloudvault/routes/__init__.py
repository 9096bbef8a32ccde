from cloudvault.routes.auth import auth_bp
from cloudvault.routes.files import files_bp
from cloudvault.routes.records import records_bp

blueprints = (auth_bp, records_bp, files_bp)
