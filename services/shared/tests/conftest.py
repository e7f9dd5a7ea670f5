"""Configuração dos testes do pacote ``shared``."""

import os
import sys
from pathlib import Path

import pytest

# services/ no sys.path para importar ``shared``
SERVICES_DIR = Path(__file__).resolve().parents[2]
if str(SERVICES_DIR) not in sys.path:
    sys.path.insert(0, str(SERVICES_DIR))

# nenhum teste deve abrir conexão real com o Redis
os.environ["REDIS_URL"] = ""


@pytest.fixture
def anyio_backend():
    # o lifespan usa asyncio.sleep; os testes rodam só no backend asyncio
    return "asyncio"
