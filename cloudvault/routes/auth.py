from flask import Blueprint, current_app, request, jsonify
from flask_jwt_extended import jwt_required

from cloudvault import store
from cloudvault.credentials import current_principal, issue_token, verify_password
from cloudvault.errors import AuthError, NotFoundError
from cloudvault.schemas import ChangePasswordSchema, LoginSchema, RegisterSchema, UserProfileSchema, load_or_400

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

register_schema = RegisterSchema()
login_schema = LoginSchema()
change_pw_schema = ChangePasswordSchema()
profile_schema = UserProfileSchema()


@auth_bp.route('/register', methods=['POST'])
def register():
    data = load_or_400(register_schema, request.get_json(silent=True),
                       missing_message="All fields are required.")
    store.create_user(data)
    return jsonify({"message": "User registered successfully"}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or login_schema.validate(data):
        raise AuthError("Invalid credentials")

    u = store.find_user_by_email(data['email'])
    if not u or not verify_password(data['password'], u.password_hash):
        current_app.logger.info("Failed login attempt")
        raise AuthError("Invalid credentials")

    body = {"token": issue_token(u.id, u.role), "role": u.role, "name": u.name}
    if u.specialty:
        body["specialty"] = u.specialty
    return jsonify(body), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def me():
    u = store.get_user(current_principal().user_id)
    if u is None:
        raise NotFoundError("User not found")
    return jsonify(profile_schema.dump(u)), 200


@auth_bp.route('/change-password', methods=['POST'])
@jwt_required()
def change_password():
    data = load_or_400(change_pw_schema, request.get_json(silent=True))
    user = store.get_user(current_principal().user_id)
    if user is None:
        raise NotFoundError("User not found")

    store.change_password(user, data['old_password'], data['new_password'])
    return jsonify({"message": "Password changed successfully"}), 200
