# velaroma/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from typing import List, Optional

from velaroma.core.carrinho import CarrinhoStore
from velaroma.core.entities import Pedido, Produto, UsuarioAtual
from velaroma.core.exceptions import (
    AcessoNegadoError,
    NumeroPedidoDuplicadoError,
    PedidoNaoEncontradoError,
    ProdutoNaoEncontradoError,
)
from velaroma.core.pedidos import ConstrutorPedido, DadosCheckout
from velaroma.core.ports import IPedidoRepository, IProdutoRepository
from velaroma.core.status import validar_transicao, validar_transicao_pagamento

logger = logging.getLogger(__name__)


def exigir_admin(usuario: Optional[UsuarioAtual]) -> UsuarioAtual:
    if usuario is None or not usuario.is_admin:
        raise AcessoNegadoError()
    return usuario


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarProdutosUseCase:
    """Caso de Uso público de leitura do catálogo."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def listar(self) -> List[Produto]:
        return self.produto_repo.listar_ativos()

    def detalhar(self, produto_id: str) -> Produto:
        """Busca um produto ativo; inativos são tratados como inexistentes."""
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto or not produto.ativo:
            raise ProdutoNaoEncontradoError(f"Produto ID {produto_id} não encontrado.")
        return produto


# ====================================================================
# 2. CASO DE USO DE CHECKOUT
# ====================================================================

class FinalizarCheckoutUseCase:
    """
    Coordena o checkout de visitante: validação, snapshot, persistência e
    limpeza do carrinho, nesta ordem.
    """
    MAX_TENTATIVAS_NUMERO = 3

    def __init__(self, pedido_repo: IPedidoRepository, construtor: ConstrutorPedido):
        self.pedido_repo = pedido_repo
        self.construtor = construtor

    def executar(self, carrinho: CarrinhoStore, dados: DadosCheckout) -> Pedido:
        # DadosInvalidosError sai daqui antes de qualquer escrita
        pedido = self.construtor.construir(carrinho.itens, dados)

        for tentativa in range(1, self.MAX_TENTATIVAS_NUMERO + 1):
            try:
                pedido_salvo = self.pedido_repo.criar(pedido)
                break
            except NumeroPedidoDuplicadoError:
                if tentativa == self.MAX_TENTATIVAS_NUMERO:
                    raise
                logger.warning("Número de pedido %s em uso, gerando outro (tentativa %d).", pedido.numero, tentativa)
                pedido = self.construtor.com_novo_numero(pedido)

        # Só limpa depois da confirmação: se criar() falhar o carrinho continua intacto
        carrinho.limpar()

        logger.info(
            "Pedido %s criado (id=%s, total=%s, itens=%d).",
            pedido_salvo.numero, pedido_salvo.id, pedido_salvo.valor_total, len(pedido_salvo.itens),
        )
        return pedido_salvo


# ====================================================================
# 3. CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class GerenciarPedidosAdminUseCase:
    """Caso de Uso para listagem e atualização de pedidos (acesso administrativo)."""

    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(self, usuario: Optional[UsuarioAtual], status: Optional[str] = None) -> List[Pedido]:
        """Lista todos os pedidos no sistema, com filtro opcional por status."""
        exigir_admin(usuario)
        return self.pedido_repo.listar(status)

    def detalhar_pedido(self, usuario: Optional[UsuarioAtual], pedido_id: str) -> Pedido:
        exigir_admin(usuario)
        return self._buscar(pedido_id)

    def atualizar_status(
        self,
        usuario: Optional[UsuarioAtual],
        pedido_id: str,
        novo_status: str,
        codigo_rastreio: Optional[str] = None,
    ) -> Pedido:
        """Aplica uma transição de status validada pela máquina de status."""
        admin = exigir_admin(usuario)
        pedido = self._buscar(pedido_id)
        novo = validar_transicao(pedido.status, novo_status)

        pedido_final = self.pedido_repo.atualizar_status(
            pedido.id,
            status_anterior=pedido.status,
            novo_status=novo,
            codigo_rastreio=(codigo_rastreio or '').strip() or None,
        )
        logger.info(
            "Pedido %s (id=%s): status %s -> %s por usuário %s.",
            pedido.numero, pedido.id, pedido.status, novo, admin.id,
        )
        return pedido_final

    def atualizar_status_pagamento(self, usuario: Optional[UsuarioAtual], pedido_id: str, novo_status: str) -> Pedido:
        admin = exigir_admin(usuario)
        pedido = self._buscar(pedido_id)
        novo = validar_transicao_pagamento(pedido.status_pagamento, novo_status)

        pedido_final = self.pedido_repo.atualizar_status_pagamento(
            pedido.id, status_anterior=pedido.status_pagamento, novo_status=novo,
        )
        logger.info(
            "Pedido %s (id=%s): pagamento %s -> %s por usuário %s.",
            pedido.numero, pedido.id, pedido.status_pagamento, novo, admin.id,
        )
        return pedido_final

    def _buscar(self, pedido_id: str) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
        return pedido
