# velaroma/core/carrinho.py
# Carrinho de compras de uma sessão anônima, persistido por um armazenamento local.

import logging
from typing import Callable, List, Optional

from velaroma.core.entities import ItemCarrinho, Produto
from velaroma.core.ports import IArmazenamentoCarrinho

logger = logging.getLogger(__name__)


class CarrinhoStore:
    """
    Mantém o carrinho de compras de uma única sessão.

    Cada operação que altera o carrinho salva o estado completo no armazenamento
    de forma síncrona e emite uma notificação de alteração, para que outros
    observadores (ex: o contador de itens do cabeçalho) releiam o carrinho.
    Duas abas da mesma sessão podem sobrescrever uma à outra: vale a última escrita.
    """

    def __init__(self, armazenamento: IArmazenamentoCarrinho):
        self.armazenamento = armazenamento
        self._observadores: List[Callable[['CarrinhoStore'], None]] = []
        self._itens: List[ItemCarrinho] = self._carregar()

    # --- Métodos de Persistência ---

    def _carregar(self) -> List[ItemCarrinho]:
        """Lê o carrinho salvo, descartando entradas corrompidas."""
        itens = []
        for dados in self.armazenamento.carregar() or []:
            try:
                itens.append(ItemCarrinho.from_dict(dados))
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                logger.warning("Item de carrinho inválido descartado (%s): %r", e, dados)
        return itens

    def _persistir(self):
        self.armazenamento.salvar([item.to_dict() for item in self._itens])
        total = self.total_unidades
        self.armazenamento.notificar_alteracao(total)
        for observador in list(self._observadores):
            observador(self)

    def inscrever(self, observador: Callable[['CarrinhoStore'], None]) -> Callable[[], None]:
        """Registra um observador e devolve a função que cancela a inscrição."""
        self._observadores.append(observador)

        def cancelar():
            if observador in self._observadores:
                self._observadores.remove(observador)
        return cancelar

    # --- Métodos de Manipulação ---

    def adicionar_item(self, produto: Produto, quantidade: int = 1):
        """Adiciona o produto ou incrementa a quantidade de um item existente."""
        if quantidade <= 0:
            return

        item = self.get_item(produto.id)
        if item:
            item.quantidade += quantidade
        else:
            self._itens.append(ItemCarrinho(
                produto_id=str(produto.id),
                nome=produto.nome,
                preco_unitario=produto.preco,
                quantidade=quantidade,
                imagem_url=produto.imagem_url,
            ))
        self._persistir()

    def atualizar_quantidade(self, produto_id: str, nova_quantidade: int):
        """Define a quantidade de um item; zero ou negativo remove o item."""
        if nova_quantidade <= 0:
            self.remover_item(produto_id)
            return

        item = self.get_item(produto_id)
        if not item:
            return
        item.quantidade = nova_quantidade
        self._persistir()

    def remover_item(self, produto_id: str):
        """Remove completamente um item do carrinho."""
        produto_id = str(produto_id)
        restantes = [item for item in self._itens if item.produto_id != produto_id]
        if len(restantes) == len(self._itens):
            return
        self._itens = restantes
        self._persistir()

    def limpar(self):
        """Esvazia o carrinho (usado após o checkout). Pode ser chamado repetidamente."""
        self._itens = []
        self._persistir()

    # --- Métodos de Consulta ---

    def get_item(self, produto_id: str) -> Optional[ItemCarrinho]:
        produto_id = str(produto_id)
        return next((item for item in self._itens if item.produto_id == produto_id), None)

    @property
    def itens(self) -> List[ItemCarrinho]:
        """Cópia dos itens: alterações externas não afetam o carrinho."""
        return [ItemCarrinho(**vars(item)) for item in self._itens]

    @property
    def total_unidades(self) -> int:
        return sum(item.quantidade for item in self._itens)

    @property
    def esta_vazio(self) -> bool:
        return not self._itens
