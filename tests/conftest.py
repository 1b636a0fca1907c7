# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import json
import os

import pytest

from gmail_client import service_account


DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

with open(os.path.join(DATA_DIR, "service_account.json"), "r") as fh:
    SERVICE_ACCOUNT_JSON = fh.read()


@pytest.fixture
def service_account_json():
    return SERVICE_ACCOUNT_JSON


@pytest.fixture
def service_account_info():
    return json.loads(SERVICE_ACCOUNT_JSON)


@pytest.fixture
def credential(service_account_json):
    return service_account.load_from_str(service_account_json)
