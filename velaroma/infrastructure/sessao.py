# velaroma/infrastructure/sessao.py
# Colaboradores ligados à requisição: armazenamento do carrinho na sessão e identidade do usuário.

from typing import List, Optional

from django.conf import settings
from django.dispatch import Signal

from velaroma.core.entities import PAPEL_ADMIN, PAPEL_USUARIO, UsuarioAtual
from velaroma.core.ports import IArmazenamentoCarrinho, IAutenticacao

# Enviado após cada alteração do carrinho. kwargs: session_key, total_unidades
carrinho_atualizado = Signal()


class ArmazenamentoSessaoDjango(IArmazenamentoCarrinho):
    """
    Persiste o carrinho na sessão do Django, como uma lista de dicionários
    serializáveis em JSON (preços como texto decimal).
    """

    def __init__(self, session, chave: Optional[str] = None):
        self.session = session
        self.chave = chave or getattr(settings, 'VELAROMA_SESSAO_CARRINHO', 'carrinho_velaroma')

    def carregar(self) -> List[dict]:
        dados = self.session.get(self.chave)
        if not isinstance(dados, list):
            return []
        return dados

    def salvar(self, itens: List[dict]) -> None:
        self.session[self.chave] = itens
        self.session.modified = True

    def notificar_alteracao(self, total_unidades: int) -> None:
        carrinho_atualizado.send(
            sender=self.__class__,
            session_key=getattr(self.session, 'session_key', None),
            total_unidades=total_unidades,
        )


class AutenticacaoDjango(IAutenticacao):
    """Traduz request.user (sessão ou JWT) para a identidade usada pelo Core."""

    def __init__(self, request):
        self.request = request

    def usuario_atual(self) -> Optional[UsuarioAtual]:
        user = getattr(self.request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        is_admin = getattr(user, 'is_admin', False) or user.is_staff
        return UsuarioAtual(id=str(user.pk), papel=PAPEL_ADMIN if is_admin else PAPEL_USUARIO)
