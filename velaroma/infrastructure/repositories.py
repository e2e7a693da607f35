"""
Camada de Infraestrutura: Implementação de Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas do Core
em chamadas concretas ao framework (Django ORM).
"""
import logging
from dataclasses import replace
from typing import List, Optional

from django.apps import apps
from django.db import transaction
from django.db.utils import DatabaseError, IntegrityError
from django.utils import timezone

from velaroma.core.entities import Pedido, Produto
from velaroma.core.exceptions import (
    NumeroPedidoDuplicadoError,
    PedidoNaoEncontradoError,
    PersistenciaError,
    TransicaoInvalidaError,
)
from velaroma.core.ports import IPedidoRepository, IProdutoRepository

from .mappers import ItemPedidoMapper, PedidoMapper, ProdutoMapper

logger = logging.getLogger(__name__)


# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    def buscar_por_id(self, produto_id: str) -> Optional[Produto]:
        try:
            model = self.ProdutoModel.objects.get(pk=produto_id)
        except (self.ProdutoModel.DoesNotExist, ValueError, TypeError):
            return None
        return ProdutoMapper.to_entity(model)

    def listar_ativos(self) -> List[Produto]:
        return [ProdutoMapper.to_entity(model) for model in self.ProdutoModel.objects.filter(ativo=True)]


class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('vendas', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('vendas', 'ItemPedido')

    def _queryset(self):
        return self.PedidoModel.objects.prefetch_related('itens')

    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]:
        try:
            model = self._queryset().get(pk=pedido_id)
        except (self.PedidoModel.DoesNotExist, ValueError, TypeError):
            return None
        return PedidoMapper.to_entity(model)

    def listar(self, status: Optional[str] = None) -> List[Pedido]:
        qs = self._queryset()
        if status:
            qs = qs.filter(status=status)
        return [PedidoMapper.to_entity(model) for model in qs]

    def criar(self, pedido: Pedido) -> Pedido:
        """Salva o pedido e todos os itens na mesma transação."""
        try:
            with transaction.atomic():
                model = PedidoMapper.to_model(pedido)
                model.save()
                self.ItemPedidoModel.objects.bulk_create([
                    ItemPedidoMapper.to_model(item, pedido_id=model.pk, posicao=posicao)
                    for posicao, item in enumerate(pedido.itens)
                ])
        except IntegrityError as e:
            if self.PedidoModel.objects.filter(numero=pedido.numero).exists():
                raise NumeroPedidoDuplicadoError(pedido.numero) from e
            logger.error("Falha de integridade ao salvar o pedido %s: %s", pedido.numero, e)
            raise PersistenciaError() from e
        except DatabaseError as e:
            logger.error("Banco indisponível ao salvar o pedido %s: %s", pedido.numero, e)
            raise PersistenciaError() from e
        except ArithmeticError as e:
            logger.error("Valores fora do formato das colunas no pedido %s: %s", pedido.numero, e)
            raise PersistenciaError() from e

        # Devolve o próprio snapshot com a chave gerada, sem reler do banco
        return replace(pedido, id=str(model.pk), criado_em=model.criado_em, atualizado_em=model.atualizado_em)

    def atualizar_status(
        self,
        pedido_id: str,
        status_anterior: str,
        novo_status: str,
        codigo_rastreio: Optional[str] = None,
    ) -> Pedido:
        campos = {'status': novo_status}
        if codigo_rastreio:
            campos['codigo_rastreio'] = codigo_rastreio
        self._atualizar_condicional(pedido_id, 'status', status_anterior, campos)
        return self.buscar_por_id(pedido_id)

    def atualizar_status_pagamento(self, pedido_id: str, status_anterior: str, novo_status: str) -> Pedido:
        self._atualizar_condicional(
            pedido_id, 'status_pagamento', status_anterior, {'status_pagamento': novo_status}
        )
        return self.buscar_por_id(pedido_id)

    def _atualizar_condicional(self, pedido_id, campo_status, valor_anterior, campos):
        """
        UPDATE de uma única linha condicionado ao valor anterior do status.
        Se outra requisição mudou o pedido nesse meio tempo, nada é gravado.
        """
        campos['atualizado_em'] = timezone.now()
        try:
            with transaction.atomic():
                atualizados = self.PedidoModel.objects.filter(
                    pk=pedido_id, **{campo_status: valor_anterior}
                ).update(**campos)
        except DatabaseError as e:
            logger.error("Banco indisponível ao atualizar o pedido %s: %s", pedido_id, e)
            raise PersistenciaError() from e

        if not atualizados:
            atual = self.PedidoModel.objects.filter(pk=pedido_id).values_list(campo_status, flat=True).first()
            if atual is None:
                raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
            raise TransicaoInvalidaError(atual, campos[campo_status])
