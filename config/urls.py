"""
URL configuration for the organization access service.

The access engine is consumed in-process; only service metadata and a health
probe are routed here.
"""
from django.urls import path
from django.http import JsonResponse

def root_view(request):
    return JsonResponse({
        "status": "healthy",
        "service": "org-access",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health/"
        }
    })

def health_check(request):
    return JsonResponse({"status": "healthy", "service": "org-access"})

urlpatterns = [
    path('', root_view, name='root'),
    path('health/', health_check, name='health'),
]
