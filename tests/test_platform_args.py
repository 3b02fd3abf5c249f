from dalec.platform_args import Platform, fill_platform_args


def test_format_os_arch():
    assert Platform("linux", "amd64").format() == "linux/amd64"


def test_format_with_variant():
    assert Platform("linux", "arm64", "v8").format() == "linux/arm64/v8"


def test_format_unknown_without_os():
    assert Platform("", "amd64").format() == "unknown"


def test_fill_platform_args_sets_all_keys():
    platform = Platform("linux", "arm64", "v8")
    args = fill_platform_args("TARGET", {}, platform)
    assert args == {
        "TARGETOS": "linux",
        "TARGETARCH": "arm64",
        "TARGETVARIANT": "v8",
        "TARGETPLATFORM": platform.format(),
    }


def test_fill_platform_args_mutates_and_keeps_others():
    args = {"VERSION": "0.0.1", "BUILDARCH": "old"}
    result = fill_platform_args("BUILD", args, Platform("linux", "amd64"))
    assert result is args
    assert args["VERSION"] == "0.0.1"
    assert args["BUILDARCH"] == "amd64"
    assert args["BUILDVARIANT"] == ""