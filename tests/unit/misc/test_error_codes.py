# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for the error code registry."""

from __future__ import annotations

import pytest

from typelens._internal.error_codes import error_code_catalog, error_code_for
from typelens.config import InvalidConfigFileError, UnsupportedConfigVersionError
from typelens.exceptions import PayloadValidationError, TypelensError, TypeReferenceError

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (TypelensError("boom"), "TL000"),
        (TypeReferenceError("pkg:Name", "missing module"), "TL300"),
        (PayloadValidationError("file.json", ValueError("bad")), "TL200"),
        (UnsupportedConfigVersionError(9, 0), "TL111"),
    ],
)
def test_error_code_for_known_exceptions(exc: BaseException, code: str) -> None:
    assert error_code_for(exc) == code


def test_error_code_for_subclass_uses_nearest_parent() -> None:
    class CustomReferenceError(TypeReferenceError):
        pass

    assert error_code_for(CustomReferenceError("x", "y")) == "TL300"


def test_error_code_for_foreign_exception_defaults() -> None:
    assert error_code_for(RuntimeError("x")) == "TL000"


def test_error_code_catalog_is_unique() -> None:
    catalog = error_code_catalog()

    assert len(set(catalog.values())) == len(catalog)
    assert catalog["typelens.config.models.InvalidConfigFileError"] == "TL113"
    assert InvalidConfigFileError.__module__ == "typelens.config.models"
