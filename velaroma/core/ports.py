# velaroma/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositórios,
Sessão, Frete) DEVE seguir para se conectar à camada Core (Casos de Uso).
Nenhum módulo do Core acessa estado global: tudo chega pelo construtor.
"""

from typing import Protocol, List, Optional
from abc import abstractmethod
from decimal import Decimal

from velaroma.core.entities import Pedido, Produto, UsuarioAtual


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a leitura de Produtos do catálogo."""

    @abstractmethod
    def buscar_por_id(self, produto_id: str) -> Optional[Produto]: ...

    @abstractmethod
    def listar_ativos(self) -> List[Produto]: ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def criar(self, pedido: Pedido) -> Pedido:
        """
        Persiste o pedido e seus itens de forma atômica e devolve a entidade com o id gerado.
        Levanta NumeroPedidoDuplicadoError se o número já existir.
        """
        ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar(self, status: Optional[str] = None) -> List[Pedido]: ...

    @abstractmethod
    def atualizar_status(
        self,
        pedido_id: str,
        status_anterior: str,
        novo_status: str,
        codigo_rastreio: Optional[str] = None,
    ) -> Pedido:
        """
        Atualiza o status somente se o registro ainda estiver em status_anterior.
        Levanta TransicaoInvalidaError caso contrário, sem alterar o registro.
        """
        ...

    @abstractmethod
    def atualizar_status_pagamento(self, pedido_id: str, status_anterior: str, novo_status: str) -> Pedido: ...


# ====================================================================
# 2. COLABORADORES DE SESSÃO E FRETE
# ====================================================================

class IArmazenamentoCarrinho(Protocol):
    """Armazenamento local (chave-valor) do carrinho de uma sessão anônima."""

    @abstractmethod
    def carregar(self) -> List[dict]: ...

    @abstractmethod
    def salvar(self, itens: List[dict]) -> None: ...

    @abstractmethod
    def notificar_alteracao(self, total_unidades: int) -> None:
        """Emite o evento de alteração para outros componentes (ex: contador do carrinho)."""
        ...


class IAutenticacao(Protocol):
    """Colaborador de identidade: quem está fazendo a requisição."""

    @abstractmethod
    def usuario_atual(self) -> Optional[UsuarioAtual]: ...


class ICalculadoraFrete(Protocol):
    """Política de frete: pode ser a regra fixa ou um serviço externo de cotação."""

    @abstractmethod
    def calcular(self, subtotal: Decimal) -> Decimal: ...
