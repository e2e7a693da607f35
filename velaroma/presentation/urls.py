"""
Define as rotas de API REST da camada de apresentação.
Catálogo e administração de pedidos usam ViewSets registrados no Router;
carrinho e checkout são APIViews simples ligadas à sessão.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

# Configuração do Router para ViewSets (API REST)
router = DefaultRouter()
router.register(r'produtos', views.ProdutoViewSet, basename='produto')
router.register(r'essencias', views.EssenciaViewSet, basename='essencia')
router.register(r'banners', views.BannerViewSet, basename='banner')
router.register(r'admin/pedidos', views.PedidoAdminViewSet, basename='admin-pedido')


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE COMPRA (CARRINHO E CHECKOUT)
    # ====================================================================
    path('carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),

    # ====================================================================
    # 2. CATÁLOGO E ADMINISTRAÇÃO (Router)
    # ====================================================================
    path('', include(router.urls)),
]
