import logging

from gentools.file_validator import validate_file, validate_source

_VALID = """
#include "SerializationMacros.h"
#include "ValidHeader.generated.h"

class SERIALIZABLE(JSON, XML) ValidTestType
{
public:
    GENERATED_SERIALIZATION_BODY();
};
"""


def test_valid_source_passes():
    assert validate_source(_VALID, "ValidHeader.hpp") is True


def test_angle_include_with_directories_passes():
    text = "#include <dir/sub/ValidHeader.generated.h>\nGENERATED_SERIALIZATION_BODY()\n"
    assert validate_source(text, "src/ValidHeader.h") is True


def test_body_macro_with_spaces_passes():
    text = '#include "ValidHeader.generated.h"\nGENERATED_SERIALIZATION_BODY ( )\n'
    assert validate_source(text, "ValidHeader.h") is True


def test_missing_include_fails(caplog):
    text = "GENERATED_SERIALIZATION_BODY()\n"
    with caplog.at_level(logging.ERROR, logger="gentools.file_validator"):
        assert validate_source(text, "ValidHeader.hpp") is False
    assert "does not include the generated header file" in caplog.text


def test_include_for_other_header_fails():
    text = '#include "OtherHeader.generated.h"\nGENERATED_SERIALIZATION_BODY()\n'
    assert validate_source(text, "ValidHeader.hpp") is False


def test_missing_body_fails(caplog):
    text = '#include "ValidHeader.generated.h"\n'
    with caplog.at_level(logging.ERROR, logger="gentools.file_validator"):
        assert validate_source(text, "ValidHeader.hpp") is False
    assert "GENERATED_SERIALIZATION_BODY() macro" in caplog.text


def test_validate_file_reads_from_disk(tmp_path):
    path = tmp_path / "ValidHeader.hpp"
    path.write_text(_VALID, encoding="utf-8")
    assert validate_file(path) is True


def test_validate_file_rejects_incomplete_file(tmp_path):
    path = tmp_path / "ValidHeader.hpp"
    path.write_text("class Empty {};\n", encoding="utf-8")
    assert validate_file(str(path)) is False


def test_missing_file_fails(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="gentools.file_validator"):
        assert validate_file(tmp_path / "Absent.hpp") is False
    assert "Could not open file" in caplog.text