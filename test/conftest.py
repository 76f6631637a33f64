import pytest

ROUTING_ENV_VARS = [
    "APP_NETWORK",
    "BUNDLER_PRIMARY_NAME",
    "BUNDLER_PRIMARY_URL",
    "BUNDLER_SECONDARY_NAME",
    "BUNDLER_SECONDARY_URL",
    "BUNDLER_ENTRYPOINT",
    "BUNDLER_SEND_TIMEOUT_MS",
    "BUNDLER_RECEIPT_POLL_MS",
    "BUNDLER_RECEIPT_TIMEOUT_MS",
    "PIMLICO_BASE_BUNDLER_URL",
    "PIMLICO_BASE_SEPOLIA_BUNDLER_URL",
    "ENVIRONMENT",
]


@pytest.fixture
def routing_env(monkeypatch):
    # Isolate from the developer's .env / shell
    for key in ROUTING_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BUNDLER_PRIMARY_NAME", "pimlico")
    monkeypatch.setenv("BUNDLER_PRIMARY_URL", "https://pimlico.example/rpc")
    monkeypatch.setenv("BUNDLER_SECONDARY_NAME", "alchemy")
    monkeypatch.setenv("BUNDLER_SECONDARY_URL", "https://alchemy.example/rpc")
    return monkeypatch
