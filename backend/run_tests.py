import os
import sys

import pytest
from dotenv import load_dotenv

if __name__ == "__main__":
    # Variables d'environnement de test (dossier de logs, etc.) si le fichier existe
    load_dotenv(dotenv_path="test.env")

    test_path = os.path.join(os.path.dirname(__file__), "tests")

    exit_code = pytest.main([test_path, "-v", *sys.argv[1:]])
    sys.exit(exit_code)
