"""
Construtor de Pedidos: transforma carrinho + dados do checkout em um Pedido imutável.
"""
import re
import secrets
import time
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional

from velaroma.core.entities import Cliente, Endereco, ItemPedido, Pedido
from velaroma.core.exceptions import DadosInvalidosError
from velaroma.core.ports import ICalculadoraFrete
from velaroma.core.precos import VALOR_MAXIMO, resumir
from velaroma.core.status import StatusPagamento, StatusPedido

UF_REGEX = re.compile(r'^[A-Za-z]{2}$')

# Tamanho máximo de cada campo, igual às colunas do Pedido
TAMANHO_MAXIMO = {
    'nome_cliente': 255,
    'email_cliente': 320,
    'telefone_cliente': 20,
    'endereco_rua': 255,
    'endereco_numero': 20,
    'endereco_complemento': 255,
    'endereco_cidade': 255,
    'endereco_cep': 20,
}


@dataclass(frozen=True)
class DadosCheckout:
    """Campos do formulário de checkout de visitante, já convertidos para texto."""
    nome_cliente: str = ''
    email_cliente: str = ''
    telefone_cliente: Optional[str] = None
    endereco_rua: str = ''
    endereco_numero: str = ''
    endereco_complemento: Optional[str] = None
    endereco_cidade: str = ''
    endereco_estado: str = ''
    endereco_cep: str = ''


def gerar_numero_pedido() -> str:
    """
    ORD-<epoch em ms>-<4 hex aleatórios>.

    O prefixo de tempo mantém a ordenação legível; o sufixo reduz a chance de
    colisão entre pedidos enviados no mesmo milissegundo. A unicidade final é
    garantida pela constraint do banco.
    """
    return f"ORD-{int(time.time() * 1000)}-{secrets.token_hex(2).upper()}"


def email_valido(email: str) -> bool:
    if email.count('@') != 1:
        return False
    local, dominio = email.split('@')
    return bool(local) and bool(dominio)


def validar_dados_checkout(dados: DadosCheckout) -> Dict[str, str]:
    """Aplica todas as regras e devolve TODOS os erros encontrados (campo -> mensagem)."""
    erros = {}

    if not (dados.nome_cliente or '').strip():
        erros['nome_cliente'] = 'Nome é obrigatório.'

    email = (dados.email_cliente or '').strip()
    if not email or not email_valido(email):
        erros['email_cliente'] = 'Email válido é obrigatório.'

    obrigatorios = {
        'endereco_rua': 'Rua é obrigatória.',
        'endereco_numero': 'Número é obrigatório.',
        'endereco_cidade': 'Cidade é obrigatória.',
        'endereco_estado': 'Estado é obrigatório.',
        'endereco_cep': 'CEP é obrigatório.',
    }
    for campo, mensagem in obrigatorios.items():
        if not (getattr(dados, campo) or '').strip():
            erros[campo] = mensagem

    estado = (dados.endereco_estado or '').strip()
    if estado and not UF_REGEX.match(estado):
        erros['endereco_estado'] = 'Estado deve ser a sigla de 2 letras (ex: SP).'

    for campo, tamanho in TAMANHO_MAXIMO.items():
        if campo not in erros and len((getattr(dados, campo) or '').strip()) > tamanho:
            erros[campo] = f'Informe no máximo {tamanho} caracteres.'

    return erros


def validar_checkout(
    itens_carrinho: Iterable,
    dados: DadosCheckout,
    politica_frete: Optional[ICalculadoraFrete] = None,
) -> Dict[str, str]:
    """Erros dos dados do cliente somados aos do carrinho (vazio ou acima do valor máximo)."""
    itens_carrinho = list(itens_carrinho)
    erros = validar_dados_checkout(dados)

    if not itens_carrinho:
        erros['itens'] = 'O carrinho de compras está vazio.'
    elif (
        resumir(itens_carrinho, politica_frete).total > VALOR_MAXIMO
        or any(item.subtotal > VALOR_MAXIMO for item in itens_carrinho)
    ):
        erros['itens'] = f'O valor do pedido ultrapassa o limite de R$ {VALOR_MAXIMO}.'

    return erros


def _opcional(valor: Optional[str]) -> Optional[str]:
    valor = (valor or '').strip()
    return valor or None


class ConstrutorPedido:
    """
    Valida o checkout e materializa o Pedido a partir do carrinho.

    Nunca altera o carrinho: limpá-lo é responsabilidade de quem chama, e só
    depois que o pedido foi salvo com sucesso.
    """

    def __init__(
        self,
        politica_frete: Optional[ICalculadoraFrete] = None,
        gerar_numero: Callable[[], str] = gerar_numero_pedido,
        relogio: Callable[[], datetime] = datetime.now,
    ):
        self.politica_frete = politica_frete
        self.gerar_numero = gerar_numero
        self.relogio = relogio

    def construir(self, itens_carrinho: Iterable, dados: DadosCheckout) -> Pedido:
        itens_carrinho = list(itens_carrinho)

        erros = validar_checkout(itens_carrinho, dados, self.politica_frete)
        if erros:
            raise DadosInvalidosError(erros)
        resumo = resumir(itens_carrinho, self.politica_frete)

        # Snapshot: preço e subtotal ficam fixos, imunes a mudanças futuras no produto
        itens = tuple(
            ItemPedido(
                produto_id=str(item.produto_id),
                nome_produto=item.nome,
                preco_unitario=item.preco_unitario,
                quantidade=item.quantidade,
            )
            for item in itens_carrinho
        )
        agora = self.relogio()

        return Pedido(
            numero=self.gerar_numero(),
            cliente=Cliente(
                nome=dados.nome_cliente.strip(),
                email=dados.email_cliente.strip(),
                telefone=_opcional(dados.telefone_cliente),
            ),
            endereco=Endereco(
                rua=dados.endereco_rua.strip(),
                numero=dados.endereco_numero.strip(),
                complemento=_opcional(dados.endereco_complemento),
                cidade=dados.endereco_cidade.strip(),
                estado=dados.endereco_estado.strip().upper(),
                cep=dados.endereco_cep.strip(),
            ),
            itens=itens,
            valor_frete=resumo.frete,
            valor_total=resumo.total,
            status=StatusPedido.PENDENTE,
            status_pagamento=StatusPagamento.PENDENTE,
            criado_em=agora,
            atualizado_em=agora,
        )

    def com_novo_numero(self, pedido: Pedido) -> Pedido:
        """Mesmo pedido com outro número (após colisão na constraint de unicidade)."""
        return replace(pedido, numero=self.gerar_numero())
