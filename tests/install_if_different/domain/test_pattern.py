import struct
import unittest

from src.install_if_different.domain.errors import TargetUnreadableError
from src.install_if_different.domain.pattern import Pattern, PatternType, compare_pattern
from src.install_if_different.infrastructure.filesystem.memory_fs import MemoryFileSystem

VERSION_REGEXP = r"version=([\d.]+)"


def _bzimage(version_string: bytes) -> bytes:
    data = bytearray(0x400)
    data[0x202:0x206] = b"HdrS"
    struct.pack_into("<H", data, 0x20E, 0x100)
    data[0x300 : 0x300 + len(version_string)] = version_string
    return bytes(data)


def _uimage(name: bytes, payload: bytes = b"\x00" * 64) -> bytes:
    header = struct.pack(">I", 0x27051956) + b"\x00" * 28 + name.ljust(32, b"\x00")
    return header + payload


class PatternValidityTests(unittest.TestCase):
    def test_regexp_with_one_group_is_valid(self):
        self.assertTrue(Pattern.from_directive({"regexp": VERSION_REGEXP}).is_valid())

    def test_regexp_without_group_is_invalid(self):
        self.assertFalse(Pattern.from_directive({"regexp": r"version=[\d.]+"}).is_valid())

    def test_regexp_with_two_groups_is_invalid(self):
        self.assertFalse(Pattern.from_directive({"regexp": r"(\d+)\.(\d+)"}).is_valid())

    def test_regexp_that_does_not_compile_is_invalid(self):
        self.assertFalse(Pattern.from_directive({"regexp": r"version=(["}).is_valid())

    def test_regexp_that_cannot_be_built_is_invalid(self):
        unbuildable = (
            "version=(\ud800)",
            "(a{99999999999})",
            "(" + "(?:" * 2000 + "a" + ")" * 2000 + ")",
        )
        for regexp in unbuildable:
            with self.subTest(regexp=regexp[:20]):
                self.assertFalse(Pattern.from_directive({"regexp": regexp}).is_valid())

    def test_missing_regexp_is_invalid(self):
        self.assertFalse(Pattern.from_directive({"seek": 10}).is_valid())

    def test_negative_or_non_integer_bounds_are_invalid(self):
        self.assertFalse(Pattern.from_directive({"regexp": VERSION_REGEXP, "seek": -1}).is_valid())
        self.assertFalse(Pattern.from_directive({"regexp": VERSION_REGEXP, "buffer-size": "10"}).is_valid())
        self.assertFalse(Pattern.from_directive({"regexp": VERSION_REGEXP, "seek": True}).is_valid())

    def test_predefined_patterns_are_valid(self):
        self.assertTrue(Pattern.from_directive("linux-kernel").is_valid())
        self.assertTrue(Pattern.from_directive("u-boot").is_valid())

    def test_unknown_shapes_are_invalid(self):
        for raw in ("regexp", "zephyr", None, 3, ["u-boot"]):
            with self.subTest(raw=raw):
                pattern = Pattern.from_directive(raw)
                self.assertIsNone(pattern.pattern_type)
                self.assertFalse(pattern.is_valid())

    def test_bounds_are_read_from_directive(self):
        pattern = Pattern.from_directive({"regexp": VERSION_REGEXP, "seek": 16, "buffer-size": 64})
        self.assertIs(pattern.pattern_type, PatternType.REGEXP)
        self.assertEqual(pattern.seek, 16)
        self.assertEqual(pattern.buffer_size, 64)


class PatternCaptureTests(unittest.TestCase):
    def test_regexp_captures_first_match(self):
        fs = MemoryFileSystem({"/dev/target": b"name=fw\nversion=2.0.0\nversion=3.0.0\n"})
        pattern = Pattern.from_directive({"regexp": VERSION_REGEXP})
        self.assertEqual(pattern.capture(fs, "/dev/target"), "2.0.0")

    def test_regexp_without_match_returns_empty(self):
        fs = MemoryFileSystem({"/dev/target": b"nothing here"})
        pattern = Pattern.from_directive({"regexp": VERSION_REGEXP})
        self.assertEqual(pattern.capture(fs, "/dev/target"), "")

    def test_seek_skips_leading_content(self):
        content = b"version=1.0.0\n" + b"#" * 50 + b"version=2.0.0\n"
        fs = MemoryFileSystem({"/dev/target": content})
        pattern = Pattern.from_directive({"regexp": VERSION_REGEXP, "seek": 14})
        self.assertEqual(pattern.capture(fs, "/dev/target"), "2.0.0")

    def test_buffer_size_bounds_scan_region(self):
        content = b"#" * 100 + b"version=2.0.0\n"
        fs = MemoryFileSystem({"/dev/target": content})
        bounded = Pattern.from_directive({"regexp": VERSION_REGEXP, "buffer-size": 100})
        self.assertEqual(bounded.capture(fs, "/dev/target"), "")
        unbounded = Pattern.from_directive({"regexp": VERSION_REGEXP, "buffer-size": 0})
        self.assertEqual(unbounded.capture(fs, "/dev/target"), "2.0.0")

    def test_seek_past_end_returns_empty(self):
        fs = MemoryFileSystem({"/dev/target": b"version=2.0.0"})
        pattern = Pattern.from_directive({"regexp": VERSION_REGEXP, "seek": 1000})
        self.assertEqual(pattern.capture(fs, "/dev/target"), "")

    def test_u_boot_version(self):
        fs = MemoryFileSystem({"/dev/mtd0": b"\x00\x13U-Boot 2017.05-rc2 (Jun 01 2017 - 10:00:00 +0000)\x00"})
        self.assertEqual(Pattern.from_directive("u-boot").capture(fs, "/dev/mtd0"), "2017.05-rc2")

    def test_u_boot_spl_version(self):
        fs = MemoryFileSystem({"/dev/mtd0": b"U-Boot SPL 2019.01 (Feb 11 2019 - 08:30:12 +0000)"})
        self.assertEqual(Pattern.from_directive("u-boot").capture(fs, "/dev/mtd0"), "2019.01")

    def test_linux_kernel_uimage(self):
        fs = MemoryFileSystem({"/dev/mmcblk0p1": _uimage(b"Linux-4.1.15")})
        self.assertEqual(Pattern.from_directive("linux-kernel").capture(fs, "/dev/mmcblk0p1"), "4.1.15")

    def test_linux_kernel_bzimage(self):
        fs = MemoryFileSystem({"/boot/bzImage": _bzimage(b"4.19.0-rc1 (builder@host) #1 SMP\x00")})
        self.assertEqual(Pattern.from_directive("linux-kernel").capture(fs, "/boot/bzImage"), "4.19.0-rc1")

    def test_linux_kernel_banner_fallback(self):
        content = b"\x7fELF" + b"\x00" * 32 + b"Linux version 5.10.0-yocto (oe@build) #1 PREEMPT"
        fs = MemoryFileSystem({"/boot/Image": content})
        self.assertEqual(Pattern.from_directive("linux-kernel").capture(fs, "/boot/Image"), "5.10.0-yocto")

    def test_linux_kernel_unknown_format_returns_empty(self):
        fs = MemoryFileSystem({"/boot/zImage": b"\x00" * 128})
        self.assertEqual(Pattern.from_directive("linux-kernel").capture(fs, "/boot/zImage"), "")

    def test_missing_target_raises_target_unreadable(self):
        pattern = Pattern.from_directive({"regexp": VERSION_REGEXP})
        with self.assertRaises(TargetUnreadableError) as ctx:
            pattern.capture(MemoryFileSystem(), "/dev/missing")
        self.assertEqual(ctx.exception.target, "/dev/missing")

    def test_capture_rejects_invalid_pattern(self):
        fs = MemoryFileSystem({"/dev/target": b"version=2.0.0"})
        with self.assertRaises(ValueError):
            Pattern.from_directive({"regexp": r"version=[\d.]+"}).capture(fs, "/dev/target")


class ComparePatternTests(unittest.TestCase):
    def setUp(self):
        self.fs = MemoryFileSystem({"/dev/target": b"header\nversion=2.0.0\n"})
        self.pattern = Pattern.from_directive({"regexp": VERSION_REGEXP})

    def test_same_version_skips_install(self):
        decision = compare_pattern(self.fs, "/dev/target", self.pattern, "2.0.0")
        self.assertFalse(decision.proceed)
        self.assertEqual(decision.reason, "version_match")
        self.assertFalse(decision.indeterminate)

    def test_different_version_installs(self):
        decision = compare_pattern(self.fs, "/dev/target", self.pattern, "1.9.0")
        self.assertTrue(decision.proceed)
        self.assertEqual(decision.reason, "version_mismatch")

    def test_versions_are_compared_without_normalization(self):
        decision = compare_pattern(self.fs, "/dev/target", self.pattern, "2.0.0 ")
        self.assertTrue(decision.proceed)

    def test_no_match_is_indeterminate_skip(self):
        pattern = Pattern.from_directive({"regexp": r"release=([\d.]+)"})
        decision = compare_pattern(self.fs, "/dev/target", pattern, "2.0.0")
        self.assertFalse(decision.proceed)
        self.assertEqual(decision.reason, "version_not_found")
        self.assertTrue(decision.indeterminate)

    def test_invalid_pattern_is_indeterminate_skip_without_reading(self):
        pattern = Pattern.from_directive({"regexp": r"(broken"})
        decision = compare_pattern(MemoryFileSystem(), "/dev/missing", pattern, "2.0.0")
        self.assertFalse(decision.proceed)
        self.assertEqual(decision.reason, "pattern_invalid")
        self.assertTrue(decision.indeterminate)
