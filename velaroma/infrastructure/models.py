# Define os modelos do banco de dados para a camada de infraestrutura (apenas autenticação).

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager

from velaroma.core.entities import PAPEL_ADMIN, PAPEL_USUARIO

# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o email é o identificador único
    para autenticação, em vez dos nomes de usuário.
    """
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('O e-mail deve ser definido')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Cria e salva um Superusuário com o e-mail e senha fornecidos.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('papel', PAPEL_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


# ====================================================================
# MODELO DE USUÁRIO
# ====================================================================

class Usuario(AbstractUser):
    """
    Usuário da loja. Clientes compram como visitantes; contas existem para
    a equipe que opera o painel administrativo.
    """
    PAPEL_CHOICES = [
        (PAPEL_USUARIO, 'Usuário'),
        (PAPEL_ADMIN, 'Administrador'),
    ]

    # Remove o campo username padrão
    username = None

    email = models.EmailField('Endereço de E-mail', unique=True)
    telefone = models.CharField(max_length=20, blank=True, null=True)
    papel = models.CharField(max_length=10, choices=PAPEL_CHOICES, default=PAPEL_USUARIO)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'infra_usuario'

    def __str__(self):
        return self.email

    @property
    def is_admin(self) -> bool:
        return self.papel == PAPEL_ADMIN or self.is_staff
