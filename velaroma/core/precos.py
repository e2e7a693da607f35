"""
Motor de preços do checkout.

Funções puras, sem efeitos colaterais. Todo o cálculo intermediário é feito
com Decimal exato; o arredondamento para 2 casas acontece só no total final.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from velaroma.core.ports import ICalculadoraFrete

CENTAVOS = Decimal('0.01')
ZERO = Decimal('0.00')
# Maior valor que cabe nas colunas DecimalField(max_digits=10, decimal_places=2)
VALOR_MAXIMO = Decimal('99999999.99')


def arredondar(valor: Decimal) -> Decimal:
    return valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PoliticaFrete:
    """Frete grátis acima do limite, taxa fixa caso contrário."""
    limite_frete_gratis: Decimal = Decimal('100.00')
    valor_frete: Decimal = Decimal('15.00')

    def calcular(self, subtotal: Decimal) -> Decimal:
        # Estritamente maior: exatamente 100.00 ainda paga frete
        if subtotal > self.limite_frete_gratis:
            return ZERO
        return self.valor_frete


POLITICA_PADRAO = PoliticaFrete()


@dataclass(frozen=True)
class ResumoValores:
    subtotal: Decimal
    frete: Decimal
    total: Decimal


def calcular_subtotal(itens: Iterable) -> Decimal:
    """Soma preço unitário x quantidade de cada item (sem arredondar por linha)."""
    return sum((item.preco_unitario * item.quantidade for item in itens), Decimal('0'))


def calcular_frete(subtotal: Decimal, politica: Optional[ICalculadoraFrete] = None) -> Decimal:
    politica = politica or POLITICA_PADRAO
    return politica.calcular(subtotal)


def resumir(itens: Iterable, politica: Optional[ICalculadoraFrete] = None) -> ResumoValores:
    """
    Calcula subtotal, frete e total do carrinho.

    Carrinho vazio é um caso especial explícito: tudo zero, sem cobrar frete,
    em vez de cair na regra genérica (0 não é > 100, o que cobraria a taxa fixa).
    """
    itens = list(itens)
    if not itens:
        return ResumoValores(subtotal=ZERO, frete=ZERO, total=ZERO)

    subtotal = calcular_subtotal(itens)
    frete = calcular_frete(subtotal, politica)
    return ResumoValores(
        subtotal=arredondar(subtotal),
        frete=arredondar(frete),
        total=arredondar(subtotal + frete),
    )


def calcular_total(itens: Iterable, politica: Optional[ICalculadoraFrete] = None) -> Decimal:
    return resumir(itens, politica).total
