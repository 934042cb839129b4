"""
공통 API 뷰
"""
from django.http import JsonResponse
from django.db import connection


def health_check(request):
    """
    헬스체크 엔드포인트

    Returns:
        - 200: 모든 시스템 정상
        - 503: 데이터베이스 연결 실패
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except Exception as e:
        return JsonResponse({
            "status": "unhealthy",
            "service": "quizportal-api",
            "database": "disconnected",
            "error": str(e),
        }, status=503)

    return JsonResponse({
        "status": "healthy",
        "service": "quizportal-api",
        "database": "connected",
    }, status=200)
