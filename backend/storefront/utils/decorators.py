from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

def merchant_required(fn):
    """
    Binds the merchant from the access token to the request.

    Must be stacked under @jwt_required().
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        claims = get_jwt()
        merchant_id = claims.get("merchant_id")
        if not merchant_id:
            return jsonify({"error": "Merchant context missing"}), 400

        g.current_merchant_id = str(merchant_id)
        g.current_user_id = get_jwt_identity()

        return fn(*args, **kwargs)
    return wrapper

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
