from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime
from typing import Optional, Tuple

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

PAPEL_ADMIN = 'admin'
PAPEL_USUARIO = 'user'


@dataclass(frozen=True)
class UsuarioAtual:
    """Identidade exposta pelo colaborador de autenticação."""
    id: str
    papel: str = PAPEL_USUARIO

    @property
    def is_admin(self) -> bool:
        return self.papel == PAPEL_ADMIN


@dataclass
class Produto:
    """Entidade do Produto (vela) como vista pelo checkout: somente leitura."""
    id: str
    nome: str
    preco: Decimal
    imagem_url: Optional[str] = None
    ativo: bool = True


@dataclass
class ItemCarrinho:
    """Entidade que representa um item no carrinho."""
    produto_id: str
    nome: str
    preco_unitario: Decimal
    quantidade: int = 1
    imagem_url: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        """Calcula o subtotal do item, sem arredondamento."""
        return self.preco_unitario * self.quantidade

    def to_dict(self) -> dict:
        """Formato serializável guardado no armazenamento local."""
        return {
            'produto_id': self.produto_id,
            'nome': self.nome,
            'preco_unitario': str(self.preco_unitario),
            'quantidade': self.quantidade,
            'imagem_url': self.imagem_url,
        }

    @classmethod
    def from_dict(cls, dados: dict) -> 'ItemCarrinho':
        quantidade = int(dados['quantidade'])
        if quantidade < 1:
            raise ValueError("quantidade deve ser maior que zero")
        return cls(
            produto_id=str(dados['produto_id']),
            nome=str(dados['nome']),
            preco_unitario=Decimal(str(dados['preco_unitario'])),
            quantidade=quantidade,
            imagem_url=dados.get('imagem_url'),
        )


@dataclass(frozen=True)
class Cliente:
    """Dados de contato informados no checkout de visitante."""
    nome: str
    email: str
    telefone: Optional[str] = None


@dataclass(frozen=True)
class Endereco:
    """Entidade do Endereço de Entrega."""
    rua: str
    numero: str
    cidade: str
    estado: str
    cep: str
    complemento: Optional[str] = None


@dataclass(frozen=True)
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: str
    nome_produto: str
    preco_unitario: Decimal
    quantidade: int
    subtotal: Decimal = field(init=False)

    def __post_init__(self):
        """Calcula o subtotal após a inicialização."""
        object.__setattr__(self, 'subtotal', self.preco_unitario * self.quantidade)


@dataclass(frozen=True)
class Pedido:
    """
    Entidade do Pedido de Venda.

    Os itens e os valores são fixados na criação. Só o status, o status de
    pagamento e os dados de rastreio mudam depois, e apenas pela máquina de
    status (que devolve uma nova instância).
    """
    numero: str
    cliente: Cliente
    endereco: Endereco
    itens: Tuple[ItemPedido, ...]
    valor_frete: Decimal
    valor_total: Decimal
    status: str
    status_pagamento: str
    id: Optional[str] = None
    codigo_rastreio: Optional[str] = None
    observacoes: Optional[str] = None
    criado_em: datetime = field(default_factory=datetime.now)
    atualizado_em: datetime = field(default_factory=datetime.now)

    @property
    def subtotal_itens(self) -> Decimal:
        return sum((item.subtotal for item in self.itens), Decimal('0'))
