# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from xhttp.http import api, registry


@pytest.fixture(autouse=True)
def _clean_global_state():
    registry.reset()
    api.set_default_client(None)
    yield
    registry.reset()
    api.set_default_client(None)
