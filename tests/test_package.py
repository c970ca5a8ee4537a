"""Tests for photoctl package imports and exports."""

from __future__ import annotations


class TestPackageImports:
    """Tests for package imports."""

    def test_import_photoctl(self):
        import photoctl

        assert hasattr(photoctl, "__version__")
        assert photoctl.UploadService is not None

    def test_import_core_modules(self):
        from photoctl.core import client, config, exceptions, logging, output, validation

        assert client is not None
        assert config is not None
        assert exceptions is not None
        assert validation is not None
        assert output is not None
        assert logging is not None

    def test_import_models(self):
        from photoctl.models import base, item, photo, progress

        assert base is not None
        assert item is not None
        assert photo is not None
        assert progress is not None

    def test_import_uploaders(self):
        from photoctl.uploaders import encoder, previews, scheduler, state, transport

        assert encoder is not None
        assert previews is not None
        assert scheduler is not None
        assert state is not None
        assert transport is not None

    def test_import_services(self):
        from photoctl.services import base, photos, uploads

        assert base is not None
        assert photos is not None
        assert uploads is not None

    def test_import_cli(self):
        from photoctl.cli.main import cli, main

        assert cli is not None
        assert callable(main)
