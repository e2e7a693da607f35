"""
Context processors para a aplicação presentation.
"""
from velaroma.core.dependency_injection import get_carrinho


def carrinho_context(request):
    """
    Adiciona o contador de itens do carrinho da sessão ao contexto dos templates.
    """
    if not hasattr(request, 'session'):
        return {}
    return {'quantidade_itens_carrinho': get_carrinho(request).total_unidades}
