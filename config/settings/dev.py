"""
Development settings
"""
from .base import *

DEBUG = True

LOGGING['root']['level'] = env('LOG_LEVEL', default='DEBUG')

# Email backend (console for development)
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
