"""Tests for the built-in default tables and platform capabilities."""

from __future__ import annotations

import pytest

from sudo_env.tables import (
    DEFAULT_CHECK,
    DEFAULT_KEEP,
    PlatformFamily,
    init_env_tables,
    platform_family,
    preload_entries,
)


class TestPlatformFamily:
    @pytest.mark.parametrize(
        ("platform", "family"),
        [
            ("linux", PlatformFamily.GENERIC),
            ("freebsd14", PlatformFamily.GENERIC),
            ("darwin", PlatformFamily.DARWIN),
            ("hp-ux11", PlatformFamily.HPUX),
            ("aix7", PlatformFamily.AIX),
            ("osf1V5", PlatformFamily.RLD),
            ("irix6", PlatformFamily.RLD),
        ],
    )
    def test_mapping(self, platform, family):
        assert platform_family(platform) == family

    def test_enum_values(self):
        assert PlatformFamily.DARWIN == "darwin"


class TestInitEnvTables:
    def test_generic_delete_list(self):
        tables = init_env_tables("linux")
        delete = list(tables.delete)
        assert delete[:9] == [
            "IFS",
            "CDPATH",
            "LOCALDOMAIN",
            "RES_OPTIONS",
            "HOSTALIASES",
            "NLSPATH",
            "PATH_LOCALE",
            "LD_*",
            "_RLD*",
        ]
        assert delete[-6:] == [
            "TERMINFO",
            "TERMINFO_DIRS",
            "TERMPATH",
            "TERMCAP",
            "ENV",
            "BASH_ENV",
        ]
        assert "DYLD_*" not in tables.delete

    def test_darwin_adds_dyld(self):
        assert "DYLD_*" in init_env_tables("darwin").delete

    def test_hpux_adds_shlib_path(self):
        assert "SHLIB_PATH" in init_env_tables("hp-ux11").delete

    def test_aix_adds_libpath(self):
        assert "LIBPATH" in init_env_tables("aix7").delete

    def test_auth_backends(self):
        tables = init_env_tables("linux", kerberos4=True, kerberos5=True, securid=True)
        for pattern in ("KRB_CONF*", "KRBCONFDIR", "KRBTKFILE", "KRB5_CONFIG*", "VAR_ACE"):
            assert pattern in tables.delete

    def test_auth_backends_off_by_default(self):
        assert "KRB5_CONFIG*" not in init_env_tables("linux").delete

    def test_check_and_keep(self):
        tables = init_env_tables("linux")
        assert tuple(tables.check) == DEFAULT_CHECK
        assert tuple(tables.keep) == DEFAULT_KEEP

    def test_tables_can_be_extended(self):
        tables = init_env_tables("linux")
        delete = tables.delete.extended("PERL5LIB")
        assert delete.matches("PERL5LIB=/tmp")
        assert not tables.delete.matches("PERL5LIB=/tmp")


class TestPreloadEntries:
    def test_generic(self):
        assert preload_entries("/usr/lib/noexec.so", "linux") == [
            "LD_PRELOAD=/usr/lib/noexec.so"
        ]

    def test_darwin(self):
        assert preload_entries("/usr/lib/noexec.dylib", "darwin") == [
            "DYLD_INSERT_LIBRARIES=/usr/lib/noexec.dylib",
            "DYLD_FORCE_FLAT_NAMESPACE=",
        ]

    def test_runtime_linker_list(self):
        assert preload_entries("/usr/lib/noexec.so", "irix6") == [
            "_RLD_LIST=/usr/lib/noexec.so:DEFAULT"
        ]
