# module terminal_backend.app
from terminal_backend.app_setup.factory import create_app

# App globale
app = create_app()
