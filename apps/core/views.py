"""
Core Views for BrokerDesk Backend

Contains health check and other utility endpoints.
"""
import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from .authentication import get_user_context

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    """
    Health check endpoint for deployment verification.

    Returns:
        - 200: Service is healthy
        - 503: Service is unhealthy (database connection failed)
    """
    response_data = {
        'status': 'healthy',
        'service': 'brokerdesk-backend',
        'database': 'unknown',
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
        response_data['database'] = 'connected'
    except DatabaseError as e:
        logger.error(f'Health check database error: {e}')
        response_data['status'] = 'unhealthy'
        response_data['database'] = f'error: {str(e)}'
        return JsonResponse(response_data, status=503)

    user = get_user_context(request)
    if user:
        response_data['authenticated'] = True
        response_data['user_id'] = str(user.id)
        response_data['role'] = user.role
    else:
        response_data['authenticated'] = False

    return JsonResponse(response_data)
