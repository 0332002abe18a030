import logging

import pytest

from yaml_split import cli

MANIFESTS = (
    b"apiVersion: apps/v1\nkind: Deployment\nmetadata:\n  name: my-app\n---\n"
    b"apiVersion: v1\nkind: Service\nmetadata:\n  name: api:edge\n---\n"
    b"apiVersion: networking.k8s.io/v1\nkind: Ingress\nmetadata:\n  name: web\n"
)


@pytest.fixture
def manifests():
    return MANIFESTS


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    if cli._loghandler is not None:
        logging.getLogger().removeHandler(cli._loghandler)
        cli._loghandler = None
