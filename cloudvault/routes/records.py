from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from cloudvault import store
from cloudvault.credentials import current_principal
from cloudvault.schemas import VitalsRecordSchema, VitalsSchema, load_or_400

records_bp = Blueprint('records', __name__, url_prefix='/api/records')

vitals_schema = VitalsSchema()
record_schema = VitalsRecordSchema()


@records_bp.route('/add', methods=['POST'])
@jwt_required()
def add():
    data = load_or_400(vitals_schema, request.get_json(silent=True),
                       missing_message="All vitals (blood pressure, sugar, heart rate) are required")
    record = store.create_vitals(
        current_principal().user_id,
        data['bp'],
        data['sugar'],
        data['heart_rate'],
    )
    return jsonify({"message": "Vitals added successfully", "record": record_schema.dump(record)}), 200


@records_bp.route('/my', methods=['GET'])
@jwt_required()
def my_records():
    records = store.list_vitals(current_principal().user_id)
    return jsonify(record_schema.dump(records, many=True)), 200
