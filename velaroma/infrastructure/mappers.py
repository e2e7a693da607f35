"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (velaroma.core.entities)
"""
from typing import Any, Optional

from django.apps import apps

from velaroma.core.entities import (
    Cliente,
    Endereco,
    ItemPedido as ItemPedidoEntity,
    Pedido as PedidoEntity,
    Produto as ProdutoEntity,
)


def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


def _produto_fk(produto_id: str) -> Optional[int]:
    produto_id = str(produto_id)
    return int(produto_id) if produto_id.isdigit() else None


class ProdutoMapper:

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        if not model:
            return None
        return ProdutoEntity(
            id=str(model.pk),
            nome=model.nome,
            preco=model.preco,
            imagem_url=model.imagem_url or None,
            ativo=model.ativo,
        )


class ItemPedidoMapper:

    @staticmethod
    def to_entity(model: Any) -> ItemPedidoEntity:
        return ItemPedidoEntity(
            produto_id=str(model.produto_id) if model.produto_id is not None else '',
            nome_produto=model.nome_produto,
            preco_unitario=model.preco_unitario,
            quantidade=model.quantidade,
        )

    @staticmethod
    def to_model(entity: ItemPedidoEntity, pedido_id: int, posicao: int) -> Any:
        return get_model('vendas', 'ItemPedido')(
            pedido_id=pedido_id,
            produto_id=_produto_fk(entity.produto_id),
            nome_produto=entity.nome_produto,
            preco_unitario=entity.preco_unitario,
            quantidade=entity.quantidade,
            subtotal=entity.subtotal,
            posicao=posicao,
        )


class PedidoMapper:

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        if not model:
            return None
        return PedidoEntity(
            id=str(model.pk),
            numero=model.numero,
            cliente=Cliente(
                nome=model.nome_cliente,
                email=model.email_cliente,
                telefone=model.telefone_cliente,
            ),
            endereco=Endereco(
                rua=model.endereco_rua,
                numero=model.endereco_numero,
                complemento=model.endereco_complemento,
                cidade=model.endereco_cidade,
                estado=model.endereco_estado,
                cep=model.endereco_cep,
            ),
            itens=tuple(ItemPedidoMapper.to_entity(item) for item in model.itens.all()),
            valor_frete=model.valor_frete,
            valor_total=model.valor_total,
            status=model.status,
            status_pagamento=model.status_pagamento,
            codigo_rastreio=model.codigo_rastreio,
            observacoes=model.observacoes,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )

    @staticmethod
    def to_model(entity: PedidoEntity) -> Any:
        """Cria um novo modelo (não salvo) a partir da entidade."""
        return get_model('vendas', 'Pedido')(
            numero=entity.numero,
            nome_cliente=entity.cliente.nome,
            email_cliente=entity.cliente.email,
            telefone_cliente=entity.cliente.telefone,
            endereco_rua=entity.endereco.rua,
            endereco_numero=entity.endereco.numero,
            endereco_complemento=entity.endereco.complemento,
            endereco_cidade=entity.endereco.cidade,
            endereco_estado=entity.endereco.estado,
            endereco_cep=entity.endereco.cep,
            valor_total=entity.valor_total,
            valor_frete=entity.valor_frete,
            status=entity.status,
            status_pagamento=entity.status_pagamento,
            codigo_rastreio=entity.codigo_rastreio,
            observacoes=entity.observacoes,
        )
