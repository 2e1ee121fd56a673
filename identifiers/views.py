"""
Read-only JSON lookups for identifiers (used by the frontend and support staff).
Allocation is not exposed here; registration code calls generate_uid() directly.
"""
from datetime import date

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .formats import format_uid_for_display, normalize_display_uid
from .utils import validate_any_identifier


def _serialize(value):
    """Turn components (named tuples, dates, nested dicts) into JSON-friendly data."""
    if hasattr(value, '_asdict'):
        data = {k: _serialize(v) for k, v in value._asdict().items()}
        role = getattr(value, 'role', None)
        if role:
            data['role'] = role
        return data
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, date):
        return value.isoformat()
    return value


@require_GET
def validate_identifier(request):
    """
    API: Validate any identifier.
    GET /api/identifiers/validate/?identifier=a00001DL112025
    Display forms (a-00001-DL-11-2025) are accepted too.
    """
    identifier = normalize_display_uid(request.GET.get('identifier'))
    result = validate_any_identifier(identifier)
    status = 200 if result['valid'] else 400
    payload = {'identifier': identifier, **result}
    if result['valid']:
        payload['components'] = _serialize(result['components'])
    return JsonResponse(payload, status=status)


@require_GET
def display_identifier(request):
    """
    API: Display form of a user identifier.
    GET /api/identifiers/display/?identifier=a00001DL112025 -> a-00001-DL-11-2025
    """
    identifier = (request.GET.get('identifier') or '').strip()
    if not identifier:
        return JsonResponse({'error': 'identifier is required'}, status=400)
    return JsonResponse({
        'identifier': identifier,
        'display': format_uid_for_display(identifier),
    })
