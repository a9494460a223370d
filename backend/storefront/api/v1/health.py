from flask import jsonify
from storefront.extensions import section_registry
from . import v1_bp

@v1_bp.route('/health', methods=['GET'])
def health_check():
    return jsonify({
        "status": "ok",
        "service": "storefront-composer",
        "section_types": len(section_registry)
    })
