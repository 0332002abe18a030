import dataclasses

import pytest

from yaml_split.models import Record, derive_filename


def test_derive_filename():
    assert derive_filename("Deployment", "my-app") == "deployment-my-app.yaml"
    assert derive_filename("Service", "API:Edge") == "service-api-edge.yaml"
    assert derive_filename("ClusterRole", "system:controller:job-controller") == \
        "clusterrole-system-controller-job-controller.yaml"
    assert derive_filename("", "") == "-.yaml"


def test_record_filename():
    record = Record(kind="ConfigMap", name="Settings", text="kind: ConfigMap\n")
    assert record.filename == "configmap-settings.yaml"


def test_record_is_immutable():
    record = Record(kind="Pod", name="demo", text="")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.kind = "Service"
