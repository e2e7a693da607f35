from typing import Dict, Optional


class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass


class DadosInvalidosError(BaseErroCore):
    """
    Erro levantado quando dados inválidos são fornecidos.

    Carrega o mapeamento completo campo -> mensagem, para que a apresentação
    possa exibir todos os erros de uma vez.
    """
    def __init__(self, erros: Optional[Dict[str, str]] = None, message="Os dados fornecidos são inválidos."):
        self.erros = dict(erros or {})
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        self.message = message
        super().__init__(self.message)


class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto não existe ou não está ativo."""
    def __init__(self, message="O produto solicitado não foi encontrado."):
        super().__init__(message)


class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    def __init__(self, message="O pedido solicitado não foi encontrado."):
        super().__init__(message)


class PersistenciaError(BaseErroCore):
    """O armazenamento falhou ou está indisponível. A operação pode ser repetida."""
    def __init__(self, message="Não foi possível salvar os dados. Tente novamente."):
        self.message = message
        super().__init__(self.message)


class NumeroPedidoDuplicadoError(PersistenciaError):
    """O número do pedido gerado já existe no banco (violação de unicidade)."""
    def __init__(self, numero: str):
        self.numero = numero
        super().__init__(f"O número de pedido {numero} já está em uso.")

# ===============================================
# ERROS DE FLUXO DO PEDIDO
# ===============================================

class TransicaoInvalidaError(BaseErroCore):
    """Erro levantado quando a mudança de status não é permitida."""
    def __init__(self, status_atual: Optional[str], novo_status: Optional[str], message=None):
        self.status_atual = status_atual
        self.novo_status = novo_status
        if message is None:
            message = f"Não é possível alterar o status de '{status_atual}' para '{novo_status}'."
        self.message = message
        super().__init__(message)


class AcessoNegadoError(BaseErroCore):
    """Erro levantado quando a operação exige um administrador."""
    def __init__(self, message="Apenas administradores podem executar esta operação."):
        self.message = message
        super().__init__(self.message)
