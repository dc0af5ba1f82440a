# lessfilter:header:start
#
#   project      : LessFilter
#   file         : test_tool_reformatters.py
#   file_relpath : tests/pipeline/reformatters/test_tool_reformatters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Reformatters driven by external tools, run through the production tables.

Every external program is a fake installed by the `fake_tools` fixture, so the
tests pin down which tool is chosen, how it is invoked and how its output is
post-processed.
"""

from __future__ import annotations

import io
import os
from typing import TYPE_CHECKING

from yachalk import chalk

from lessfilter.core.exit_codes import ExitCode
from lessfilter.pipeline.context import Mode
from lessfilter.pipeline.engine import run
from lessfilter.rendering.ansi import strip_ansi
from tests.conftest import make_config, mark_integration

if TYPE_CHECKING:
    from pathlib import Path

    from lessfilter.config.model import Config
    from tests.conftest import FakeTools


def _render(path: Path, config: Config) -> tuple[ExitCode, bytes]:
    out = io.BytesIO()
    code: ExitCode = run(Mode.RENDER, str(path), config, out=out)
    return code, out.getvalue()


def _supports(path: Path, config: Config) -> ExitCode:
    return run(Mode.CHECK_SUPPORT, str(path), config)


@mark_integration
def test_junit_report_is_summarised(tmp_path: Path, fake_tools: FakeTools) -> None:
    """A JUnit report goes to `junitxml`, not to the XML pretty-printer."""
    fake_tools.add_recorder("junitxml", "2 tests, 0 failures\n")
    fake_tools.add_recorder("xmllint", "<formatted/>\n")
    report: Path = tmp_path / "results.xml"
    report.write_text('<?xml version="1.0"?>\n<testsuite name="t">\n</testsuite>\n', "utf-8")

    code, output = _render(report, make_config(tmp_path))

    assert (code, output) == (ExitCode.SUCCESS, b"2 tests, 0 failures\n")
    assert fake_tools.recorded_args("junitxml") == ["--show", "--summarise", str(report)]
    assert fake_tools.recorded_args("xmllint") == []


@mark_integration
def test_xml_is_pretty_printed(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Well-formed XML is indented by `xmllint` after a capability probe."""
    fake_tools.add_recorder("junitxml")
    fake_tools.add_recorder("xmllint", "<a>\n  <b/>\n</a>\n")
    document: Path = tmp_path / "doc.xml"
    document.write_text("<a><b/></a>\n", encoding="utf-8")

    assert _render(document, make_config(tmp_path)) == (ExitCode.SUCCESS, b"<a>\n  <b/>\n</a>\n")
    assert fake_tools.recorded_args("xmllint") == [
        "--nonet",
        str(document),
        "--nonet",
        "--format",
        str(document),
    ]


@mark_integration
def test_malformed_xml_is_not_supported(tmp_path: Path, fake_tools: FakeTools) -> None:
    """If the probe fails, neither check nor render claims the file."""
    fake_tools.add("xmllint", "exit 1")
    document: Path = tmp_path / "broken.xml"
    document.write_text("<a>\n", encoding="utf-8")
    config: Config = make_config(tmp_path)

    assert _supports(document, config) is ExitCode.UNSUPPORTED
    assert _render(document, config) == (ExitCode.UNSUPPORTED, b"")


@mark_integration
def test_basic_detokeniser_writes_its_own_artifact(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The detokeniser is told where to write; the artifact is streamed."""
    fake_tools.add(
        "bastotxt",
        'while [ "$#" -gt 0 ]; do\n'
        '  if [ "$1" = "-o" ]; then out="$2"; shift; fi\n'
        "  shift\n"
        "done\n"
        "printf '10 PRINT \"HI\"\\n' > \"$out\"",
    )
    program: Path = tmp_path / "Hello,ffb"
    program.write_bytes(b"\x0d\x00\x0a\x0b\xf1")

    assert _render(program, make_config(tmp_path)) == (ExitCode.SUCCESS, b'10 PRINT "HI"\n')


@mark_integration
def test_basic_detokeniser_failure_yields_empty_output(
    tmp_path: Path, fake_tools: FakeTools
) -> None:
    """A detokeniser that writes nothing still leaves an (empty) artifact."""
    fake_tools.add("riscos-basicdetokenise", "exit 2")
    program: Path = tmp_path / "Broken,ffb"
    program.write_bytes(b"\x00")

    assert _render(program, make_config(tmp_path)) == (ExitCode.SUCCESS, b"")


@mark_integration
def test_ar_archive_report_on_linux(tmp_path: Path, fake_tools: FakeTools) -> None:
    """`ar` and `nm` output are combined; undefined symbols are dropped."""
    fake_tools.add_recorder("ar", "rw-r--r-- 0/0 100 Jan  1 00:00 2024 foo.o\n")
    fake_tools.add(
        "nm",
        "printf '0000000000000000 T foo\\n                 U bar\\n'",
    )
    archive: Path = tmp_path / "libfoo.a"
    archive.write_bytes(b"!<arch>\n")

    code, output = _render(archive, make_config(tmp_path, system="Linux"))
    text: str = output.decode("utf-8")

    assert code is ExitCode.SUCCESS
    assert fake_tools.recorded_args("ar") == ["tOv", str(archive)]
    assert strip_ansi(text) == (
        "'ar' archive\n------------\n\n"
        "Archived files:\nrw-r--r-- 0/0 100 Jan  1 00:00 2024 foo.o\n\n\n"
        "Symbols:\n0000000000000000 T foo\n"
    )
    assert chalk.magenta("Archived files:") in text
    assert chalk.yellow("foo.o") in text


@mark_integration
def test_ar_declines_on_other_platforms(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The native `ar` flags are only known for macOS and Linux."""
    fake_tools.add_recorder("ar")
    archive: Path = tmp_path / "libfoo.a"
    archive.write_bytes(b"!<arch>\n")

    assert _supports(archive, make_config(tmp_path, system="FreeBSD")) is ExitCode.UNSUPPORTED


@mark_integration
def test_riscos_libfile_preferred_for_ar(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The RISC OS 64 librarian wins over `ar` when installed."""
    fake_tools.add_recorder("ar")
    fake_tools.add_recorder("riscos64-libfile", "x\n")
    archive: Path = tmp_path / "libfoo.a"
    archive.write_bytes(b"!<arch>\n")

    code, _ = _render(archive, make_config(tmp_path))

    assert code is ExitCode.SUCCESS
    assert fake_tools.recorded_args("riscos64-libfile") == ["-l", str(archive), "-s", str(archive)]
    assert fake_tools.recorded_args("ar") == []


@mark_integration
def test_certificate_request_is_decoded(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Requests use `openssl req`; field names and values are coloured."""
    listing = "Certificate Request:\n    Data:\n        Version: 1 (0x0)\n"
    fake_tools.add_recorder("openssl", listing)
    request: Path = tmp_path / "server.csr"
    request.write_text("-----BEGIN CERTIFICATE REQUEST-----\n", encoding="utf-8")

    code, output = _render(request, make_config(tmp_path))
    text: str = output.decode("utf-8")

    assert code is ExitCode.SUCCESS
    assert fake_tools.recorded_args("openssl") == ["req", "-in", str(request), "-text"]
    assert strip_ansi(text) == listing
    assert chalk.magenta("Version") in text
    assert chalk.cyan("1 (0x0)") in text


@mark_integration
def test_certificate_uses_x509(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Certificates use `openssl x509`."""
    fake_tools.add_recorder("openssl", "Certificate:\n")
    certificate: Path = tmp_path / "server.crt"
    certificate.write_text("-----BEGIN CERTIFICATE-----\n", encoding="utf-8")

    _render(certificate, make_config(tmp_path))

    assert fake_tools.recorded_args("openssl")[0] == "x509"


@mark_integration
def test_plist_escapes_control_characters(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Raw ESC characters from a property list are shown, not interpreted."""
    fake_tools.add("plutil", "printf '{\\n  \"k\" => \"a\\033[31mb\"\\n}\\n'")
    plist: Path = tmp_path / "Info.plist"
    plist.write_bytes(b"bplist00")

    code, output = _render(plist, make_config(tmp_path))

    assert code is ExitCode.SUCCESS
    assert b"\x1b" not in output
    assert b'"a<ESC>[31mb"' in output


@mark_integration
def test_pyc_source_path_is_shortened(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The viewer runs on the real path; the source file name becomes `<pysource>`."""
    fake_tools.add(
        "python3",
        "printf '%s\\n' \"$1\" > \"$0.script\"\n"
        "printf 'Disassembly of %s\\n' \"$(printf '%s' \"$2\" | sed 's/\\.pyc$/.py/')\"",
    )
    bytecode: Path = tmp_path / "mod.pyc"
    bytecode.write_bytes(b"\x00" * 16)

    code, output = _render(bytecode, make_config(tmp_path))

    assert (code, output) == (ExitCode.SUCCESS, b"Disassembly of <pysource>\n")
    script: str = (fake_tools.bin_dir / "python3.script").read_text(encoding="utf-8").strip()
    assert os.path.basename(script) == "pyc_view.py"


@mark_integration
def test_pyc_prefers_python3(tmp_path: Path, fake_tools: FakeTools) -> None:
    """When both interpreters exist, the bytecode viewer runs under `python3`."""
    fake_tools.add_recorder("python", "legacy")
    fake_tools.add_recorder("python3", "Disassembly")
    bytecode: Path = tmp_path / "mod.pyc"
    bytecode.write_bytes(b"\x00" * 16)

    code, output = _render(bytecode, make_config(tmp_path))

    assert (code, output) == (ExitCode.SUCCESS, b"Disassembly")
    assert not fake_tools.log_path("python").exists()


@mark_integration
def test_decaof_listing_is_recoloured(tmp_path: Path, fake_tools: FakeTools) -> None:
    """Headings are green and symbol names cyan inside the symbol table."""
    fake_tools.add_recorder("riscos-decaof", "** Symbol Table\nfoo (global)\n\r")
    obj: Path = tmp_path / "main.aof"
    obj.write_bytes(b"\xc5\xc6\xcb\xc3")

    code, output = _render(obj, make_config(tmp_path))
    text: str = output.decode("utf-8")

    assert code is ExitCode.SUCCESS
    assert fake_tools.recorded_args("riscos-decaof") == ["-drmsc", str(obj)]
    assert text.splitlines()[:2] == [
        chalk.green("** Symbol Table"),
        f"{chalk.cyan('foo')} (global)",
    ]
    assert "\r" not in text


@mark_integration
def test_objdump_needs_cross_tool_off_macos(tmp_path: Path, fake_tools: FakeTools) -> None:
    """The native objdump is only used on macOS; a cross objdump always works."""
    fake_tools.add_recorder("objdump")
    binary: Path = tmp_path / "prog.elf-arm64"
    binary.write_bytes(b"\x7fELF")

    assert _supports(binary, make_config(tmp_path, system="Linux")) is ExitCode.UNSUPPORTED
    assert _supports(binary, make_config(tmp_path, system="Darwin")) is ExitCode.SUCCESS

    listing = "Disassembly of section .text:\n\n0000000000400078 <_start>:\n"
    fake_tools.add_recorder("riscos64-objdump", listing)
    code, output = _render(binary, make_config(tmp_path, system="Linux"))
    text: str = output.decode("utf-8")

    assert code is ExitCode.SUCCESS
    assert fake_tools.recorded_args("riscos64-objdump") == ["-r", "-d", "-x", str(binary)]
    assert strip_ansi(text) == listing
    assert text.splitlines() == [
        chalk.green("Disassembly of section .text:"),
        "",
        f"{chalk.magenta('0000000000400078')} <{chalk.cyan('_start')}>:",
    ]
