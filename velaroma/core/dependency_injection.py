# velaroma/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios
e colaboradores concretos da camada de Infraestrutura.
"""
from decimal import Decimal

from django.conf import settings

from velaroma.core.carrinho import CarrinhoStore
from velaroma.core.pedidos import ConstrutorPedido
from velaroma.core.precos import PoliticaFrete
from velaroma.infrastructure.repositories import PedidoRepositoryDjango, ProdutoRepositoryDjango
from velaroma.infrastructure.sessao import ArmazenamentoSessaoDjango, AutenticacaoDjango
from .use_cases import FinalizarCheckoutUseCase, GerenciarPedidosAdminUseCase, ListarProdutosUseCase


def get_politica_frete() -> PoliticaFrete:
    return PoliticaFrete(
        limite_frete_gratis=Decimal(str(settings.VELAROMA_FRETE_GRATIS_ACIMA)),
        valor_frete=Decimal(str(settings.VELAROMA_VALOR_FRETE)),
    )


# ====================================================================
# Colaboradores por requisição
# ====================================================================

def get_carrinho(request) -> CarrinhoStore:
    return CarrinhoStore(ArmazenamentoSessaoDjango(request.session))

def get_usuario_atual(request):
    return AutenticacaoDjango(request).usuario_atual()


# ====================================================================
# Use Cases
# ====================================================================

def get_listar_produtos_use_case() -> ListarProdutosUseCase:
    return ListarProdutosUseCase(ProdutoRepositoryDjango())

def get_finalizar_checkout_use_case() -> FinalizarCheckoutUseCase:
    return FinalizarCheckoutUseCase(
        pedido_repo=PedidoRepositoryDjango(),
        construtor=ConstrutorPedido(politica_frete=get_politica_frete()),
    )

def get_gerenciar_pedidos_admin_use_case() -> GerenciarPedidosAdminUseCase:
    return GerenciarPedidosAdminUseCase(PedidoRepositoryDjango())
