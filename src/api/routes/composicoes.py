# src/api/routes/composicoes.py
# Defines API endpoints for the compositions between Padrões and compositors.

from flask import Blueprint, request, jsonify, current_app

from src.services.composicao_service import ComposicaoService
from src.domain.catalog_responses import LoadCatalogParams
from src.api.errors import ApiError, NotFoundError, ValidationError, ServiceError, DatabaseError
from src.utils.logger import logger

composicoes_bp = Blueprint('composicoes', __name__)

# Helper para obter ComposicaoService
def _get_composicao_service() -> ComposicaoService:
    service = current_app.config.get('composicao_service')
    if not service:
        logger.critical("ComposicaoService not found in application config!")
        raise ServiceError("Composition service is unavailable.", 503)
    return service

def _optional_int_arg(name: str):
    value = request.args.get(name)
    if value is None or value.strip() == '':
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be an integer.")

def _error_response(error: Exception, action: str):
    """Translates an exception raised by the service into a JSON error response."""
    if isinstance(error, (ValidationError, NotFoundError)):
        logger.warning(f"{action} failed: {error.message}")
        return jsonify(error.to_dict()), error.status_code
    if isinstance(error, (ServiceError, DatabaseError, ApiError)):
        logger.error(f"Service/DB error during {action}: {error.message}", exc_info=True)
        return jsonify({"error": f"Failed to {action}: {error.message}"}), error.status_code
    logger.error(f"Unexpected error during {action}: {error}", exc_info=True)
    return jsonify({"error": "An internal server error occurred."}), 500


@composicoes_bp.route('/compositor/<string:comp_type>/<int:family_id>', methods=['GET'])
def get_padroes_by_compositor(comp_type: str, family_id: int):
    """
    Lists the Padrões composed with any compositor of a family
    (ambiente ID for AMBIENTE, material ID for MATERIAL).
    Query args: load_ambientes, load_materiais, only_active.
    """
    logger.info(f"Get padroes request: type={comp_type}, family={family_id}")
    try:
        params = LoadCatalogParams.from_query_args(request.args)
        padroes = _get_composicao_service().find_padroes_by_compositor(family_id, params, comp_type)
        return jsonify([p.to_dict() for p in padroes]), 200
    except Exception as e:
        return _error_response(e, "get padroes")


@composicoes_bp.route('/<int:padrao_id>/<string:comp_type>', methods=['GET'])
def get_compositores_by_padrao(padrao_id: int, comp_type: str):
    """Lists the compositors of a Padrão. Query args: family_id, member_id."""
    logger.info(f"Get compositores request: padrao={padrao_id}, type={comp_type}")
    try:
        family_id = _optional_int_arg('family_id')
        member_id = _optional_int_arg('member_id')
        compositores = _get_composicao_service().find_compositores_by_padrao(
            padrao_id, family_id, member_id, comp_type
        )
        return jsonify([c.to_dict() for c in compositores]), 200
    except Exception as e:
        return _error_response(e, "get compositores")


@composicoes_bp.route('/<int:padrao_id>/<string:comp_type>/<int:compositor_id>', methods=['POST'])
def add_single_association(padrao_id: int, comp_type: str, compositor_id: int):
    """Associates one compositor with a Padrão."""
    logger.info(f"Add association request: padrao={padrao_id}, type={comp_type}, compositor={compositor_id}")
    try:
        composicao = _get_composicao_service().add_single_association(padrao_id, compositor_id, comp_type)
        return jsonify(composicao.to_dict()), 201
    except Exception as e:
        return _error_response(e, "add association")


@composicoes_bp.route('/<int:padrao_id>/<string:comp_type>/all/<int:family_id>', methods=['POST'])
def add_all_associations(padrao_id: int, comp_type: str, family_id: int):
    """Associates every compositor of a family with a Padrão."""
    logger.info(f"Add all associations request: padrao={padrao_id}, type={comp_type}, family={family_id}")
    try:
        composicoes = _get_composicao_service().add_all_associations(padrao_id, family_id, comp_type)
        return jsonify([c.to_dict() for c in composicoes]), 201
    except Exception as e:
        return _error_response(e, "add associations")


@composicoes_bp.route('/<int:padrao_id>/<string:comp_type>/all/<int:family_id>', methods=['DELETE'])
def remove_all_associations(padrao_id: int, comp_type: str, family_id: int):
    """Removes every composition of a Padrão whose compositor belongs to the family."""
    logger.info(f"Remove all associations request: padrao={padrao_id}, type={comp_type}, family={family_id}")
    try:
        _get_composicao_service().remove_all_associations(padrao_id, family_id, comp_type)
        return '', 204
    except Exception as e:
        return _error_response(e, "remove associations")


@composicoes_bp.route('/composicoes/<string:comp_type>/<int:composicao_id>', methods=['DELETE'])
def remove_single_association(comp_type: str, composicao_id: int):
    """Removes one composition by its own ID."""
    logger.info(f"Remove association request: type={comp_type}, composicao={composicao_id}")
    try:
        _get_composicao_service().remove_single_association(composicao_id, comp_type)
        return '', 204
    except Exception as e:
        return _error_response(e, "remove association")
