"""
Máquina de status do pedido.

Ciclo de vida: pending -> processing -> shipped -> delivered, com cancelled
alcançável a partir de qualquer status não terminal. O pagamento é uma
dimensão separada, com as suas próprias transições.
"""
from typing import Dict, FrozenSet, Optional

from velaroma.core.exceptions import TransicaoInvalidaError


class StatusPedido:
    PENDENTE = 'pending'
    PROCESSANDO = 'processing'
    ENVIADO = 'shipped'
    ENTREGUE = 'delivered'
    CANCELADO = 'cancelled'

    CHOICES = [
        (PENDENTE, 'Pendente'),
        (PROCESSANDO, 'Processando'),
        (ENVIADO, 'Enviado'),
        (ENTREGUE, 'Entregue'),
        (CANCELADO, 'Cancelado'),
    ]


class StatusPagamento:
    PENDENTE = 'pending'
    CONCLUIDO = 'completed'
    FALHOU = 'failed'
    ESTORNADO = 'refunded'

    CHOICES = [
        (PENDENTE, 'Pendente'),
        (CONCLUIDO, 'Concluído'),
        (FALHOU, 'Falhou'),
        (ESTORNADO, 'Estornado'),
    ]


TRANSICOES_PEDIDO: Dict[str, FrozenSet[str]] = {
    StatusPedido.PENDENTE: frozenset({StatusPedido.PROCESSANDO, StatusPedido.CANCELADO}),
    StatusPedido.PROCESSANDO: frozenset({StatusPedido.ENVIADO, StatusPedido.CANCELADO}),
    StatusPedido.ENVIADO: frozenset({StatusPedido.ENTREGUE, StatusPedido.CANCELADO}),
    StatusPedido.ENTREGUE: frozenset(),
    StatusPedido.CANCELADO: frozenset(),
}

TRANSICOES_PAGAMENTO: Dict[str, FrozenSet[str]] = {
    StatusPagamento.PENDENTE: frozenset({StatusPagamento.CONCLUIDO, StatusPagamento.FALHOU}),
    StatusPagamento.FALHOU: frozenset({StatusPagamento.PENDENTE, StatusPagamento.CONCLUIDO}),
    StatusPagamento.CONCLUIDO: frozenset({StatusPagamento.ESTORNADO}),
    StatusPagamento.ESTORNADO: frozenset(),
}


def _normalizar(status: Optional[str]) -> str:
    return (status or '').strip().lower()


def _validar(transicoes: Dict[str, FrozenSet[str]], atual: str, novo: Optional[str]) -> str:
    novo_normalizado = _normalizar(novo)
    if novo_normalizado not in transicoes:
        raise TransicaoInvalidaError(atual, novo, f"O status '{novo}' não é um status válido.")
    if novo_normalizado not in transicoes.get(atual, frozenset()):
        raise TransicaoInvalidaError(atual, novo_normalizado)
    return novo_normalizado


def validar_transicao(status_atual: str, novo_status: Optional[str]) -> str:
    """Devolve o novo status normalizado ou levanta TransicaoInvalidaError."""
    return _validar(TRANSICOES_PEDIDO, status_atual, novo_status)


def validar_transicao_pagamento(status_atual: str, novo_status: Optional[str]) -> str:
    return _validar(TRANSICOES_PAGAMENTO, status_atual, novo_status)


def is_terminal(status: str) -> bool:
    return not TRANSICOES_PEDIDO.get(status)
