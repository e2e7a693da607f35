"""
Configurações para o projeto Vela Aroma.
"""

from decouple import config, Csv
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# ====================================================================
# CONFIGURAÇÕES BÁSICAS
# ====================================================================

# A SECRET_KEY deve ser lida de uma variável de ambiente por segurança.
SECRET_KEY = config('SECRET_KEY', default='django-insecure-default-key-for-development')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())

# Usuário personalizado com login por e-mail e papel (user/admin).
AUTH_USER_MODEL = 'infrastructure.Usuario'


# ====================================================================
# APLICAÇÕES INSTALADAS
# ====================================================================

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Aplicações de Terceiros
    'rest_framework',
    'drf_spectacular',
    'rest_framework_simplejwt',

    # Nossas Aplicações
    'velaroma.core.apps.CoreConfig',  # Entidades e Lógica Pura
    'velaroma.infrastructure.apps.InfrastructureConfig',  # Usuário e Repositórios
    'velaroma.catalog.apps.CatalogConfig',  # Velas, Essências e Banners
    'velaroma.vendas.apps.VendasConfig',  # Pedidos
    'velaroma.presentation.apps.PresentationConfig',  # API REST e Admin
]


# ====================================================================
# MIDDLEWARE E TEMPLATES
# ====================================================================

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'velaroma.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',

                # Contador de itens do carrinho da sessão
                'velaroma.presentation.context_processors.carrinho_context',
            ],
        },
    },
]

WSGI_APPLICATION = 'velaroma.wsgi.application'


# ====================================================================
# CONFIGURAÇÃO DO BANCO DE DADOS
# ====================================================================

# SQLite por padrão; PostgreSQL com DB_ENGINE=django.db.backends.postgresql
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default='velaroma'),
            'USER': config('DB_USER', default='velaroma'),
            'PASSWORD': config('DB_PASSWORD', default=''),
            'HOST': config('DB_HOST', default='localhost'),
            'PORT': config('DB_PORT', default='5432'),
        }
    }


# ====================================================================
# AUTENTICAÇÃO E VALIDAÇÃO DE SENHA
# ====================================================================

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# O carrinho fica na sessão como JSON
SESSION_SERIALIZER = 'django.contrib.sessions.serializers.JSONSerializer'


# ====================================================================
# INTERNACIONALIZAÇÃO
# ====================================================================

LANGUAGE_CODE = 'pt-br'

TIME_ZONE = 'America/Sao_Paulo'

USE_I18N = True

USE_TZ = True


# ====================================================================
# ARQUIVOS ESTÁTICOS
# ====================================================================

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ====================================================================
# CONFIGURAÇÕES DO DJANGO REST FRAMEWORK (DRF) E DOCS (SPECTACULAR)
# ====================================================================

SPECTACULAR_SETTINGS = {
    'TITLE': 'API da Vela Aroma',
    'DESCRIPTION': 'Catálogo, carrinho, checkout sem cadastro e gestão de pedidos da Vela Aroma.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

REST_FRAMEWORK = {
    # JWT é a autenticação primária para API, SessionAuth para o Admin e o navegador.
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}


# ====================================================================
# REGRAS DA LOJA
# ====================================================================

# Frete grátis para subtotal estritamente acima deste valor
VELAROMA_FRETE_GRATIS_ACIMA = config('VELAROMA_FRETE_GRATIS_ACIMA', default='100.00')
VELAROMA_VALOR_FRETE = config('VELAROMA_VALOR_FRETE', default='15.00')
# Chave da sessão onde o carrinho é salvo
VELAROMA_SESSAO_CARRINHO = config('VELAROMA_SESSAO_CARRINHO', default='carrinho_velaroma')


# ====================================================================
# CONFIGURAÇÕES DE LOGGING
# ====================================================================

LOG_LEVEL = config('LOG_LEVEL', default='INFO')
LOG_FILE = config('LOG_FILE', default='')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'level': LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': True,
        },
        'velaroma': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['file'] = {
        'level': LOG_LEVEL,
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': LOG_FILE,
        'maxBytes': 1024 * 1024 * 5,  # 5 MB
        'backupCount': 5,
        'formatter': 'verbose',
    }
    for logger_config in LOGGING['loggers'].values():
        logger_config['handlers'].append('file')
