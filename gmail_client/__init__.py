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

"""Send email as a Google Workspace user with a service account."""

from gmail_client import version as gmail_client_version
from gmail_client.client import GmailClient
from gmail_client.client import GmailClientBuilder

__version__ = gmail_client_version.__version__


__all__ = ["GmailClient", "GmailClientBuilder"]
