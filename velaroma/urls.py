# velaroma/urls.py
"""
Configuração principal de URL do projeto Vela Aroma.

Este arquivo centraliza o roteamento, incluindo:
1. Rotas do Admin (Django Admin)
2. Rotas da API da loja (velaroma.presentation)
3. Rotas de Autenticação JWT
4. Rotas da Documentação da API (Swagger/Redoc)
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView


urlpatterns = [
    # URL para o painel de administração padrão do Django
    path('admin/', admin.site.urls),

    # Catálogo, carrinho, checkout e pedidos (admin)
    path('api/', include('velaroma.presentation.urls')),

    # ====================================================================
    # AUTENTICAÇÃO JWT (SIMPLEJWT)
    # ====================================================================
    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # ====================================================================
    # ROTAS DE DOCUMENTAÇÃO DA API (DRF SPECTACULAR)
    # ====================================================================
    # 1. Rota para o arquivo Schema YAML (gerado automaticamente)
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),

    # 2. Rota para a interface de usuário do Swagger (visualização interativa)
    path('api/docs/swagger/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # 3. Rota para a interface Redoc
    path('api/docs/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
