from flask import Flask, jsonify, request

from .batch import analyze_batch
from .compliance import check_compliance
from .config import engine_config_from_settings, load_config
from .evaluator import PasswordStrengthEngine
from .generator import generate_many
from .suggestions import suggest_improvements

app = Flask(__name__)


def build_engine() -> PasswordStrengthEngine:
    return PasswordStrengthEngine(engine_config_from_settings(load_config()))


engine = build_engine()


def _bad_request(message: str):
    return jsonify({"error": message}), 400


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


def _flag(data, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false")
    return value


def _password_from(data):
    password = data.get("password", "")
    if not isinstance(password, str):
        raise ValueError("'password' must be a string")
    return password


@app.errorhandler(ValueError)
def handle_value_error(e):
    return _bad_request(str(e))


@app.route('/')
def home():
    return jsonify({
        "message": "PassAudit API is running"
    })


@app.route('/score', methods=['POST'])
def score_route():
    data = _json_body()
    password = _password_from(data)
    result = engine.evaluate(password)
    out = result.to_dict()
    out["suggestions"] = suggest_improvements(password, engine=engine, examples=0)["suggestions"]
    return jsonify(out)


@app.route('/batch', methods=['POST'])
def batch_route():
    data = _json_body()
    passwords = data.get("passwords")
    if not isinstance(passwords, list):
        return _bad_request("'passwords' must be a list")
    report = analyze_batch(passwords, engine=engine)
    return jsonify(report.to_dict())


@app.route('/compliance', methods=['POST'])
def compliance_route():
    data = _json_body()
    password = _password_from(data)
    return jsonify(check_compliance(password, standards=data.get("standards"), engine=engine))


@app.route('/generate', methods=['POST'])
def generate_route():
    data = _json_body()
    try:
        length = int(data.get('length', 16))
        count = int(data.get('count', 1))
    except (TypeError, ValueError):
        return _bad_request("'length' and 'count' must be integers")
    if count > 100 or length > 1024:
        return _bad_request("'count' must be at most 100 and 'length' at most 1024")
    passwords = generate_many(
        count,
        length=length,
        use_upper=_flag(data, 'upper', True),
        use_lower=_flag(data, 'lower', True),
        use_digits=_flag(data, 'digits', True),
        use_symbols=_flag(data, 'symbols', True),
        exclude_similar=_flag(data, 'exclude_similar', False),
        exclude_ambiguous=_flag(data, 'exclude_ambiguous', False),
    )
    return jsonify({'passwords': passwords})


if __name__ == "__main__":
    app.run(debug=True)
