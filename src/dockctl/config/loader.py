# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockctl/config/loader.py

import os
from pathlib import Path

import yaml

from .models import Pipeline


def load_pipeline(path: str | Path) -> Pipeline:
    raw = Path(path).read_text()

    # expand environment variables like ${REGISTRY_PASSWORD}
    expanded = os.path.expandvars(raw)

    data = yaml.safe_load(expanded) or {}
    return Pipeline.model_validate(data)
