import pytest

from cloudvault import validators
from cloudvault.sanitizer import sanitize


@pytest.mark.parametrize("bp", ["120/80", "70/40", "250/149", " 130/85 "])
def test_blood_pressure_accepts_valid_pairs(bp):
    assert validators.validate_blood_pressure(bp).valid


@pytest.mark.parametrize("bp,message", [
    ("80/120", "Systolic pressure must be higher than diastolic pressure"),
    ("100/100", "Systolic pressure must be higher than diastolic pressure"),
    ("300/80", "Systolic pressure must be between 70-250 mmHg"),
    ("120/30", "Diastolic pressure must be between 40-150 mmHg"),
    ("abc", "Blood pressure must be in format 'systolic/diastolic' (e.g., 120/80)"),
    ("1200/80", "Blood pressure must be in format 'systolic/diastolic' (e.g., 120/80)"),
    ("", "Blood pressure must be in format 'systolic/diastolic' (e.g., 120/80)"),
    ("١٢٠/٨٠", "Blood pressure must be in format 'systolic/diastolic' (e.g., 120/80)"),
    ("１２０/８０", "Blood pressure must be in format 'systolic/diastolic' (e.g., 120/80)"),
])
def test_blood_pressure_rejections_name_the_problem(bp, message):
    result = validators.validate_blood_pressure(bp)
    assert not result.valid
    assert result.message == message


def test_sugar_range():
    assert validators.validate_sugar("20").valid
    assert validators.validate_sugar("600").valid
    assert not validators.validate_sugar("19").valid
    assert not validators.validate_sugar("601").valid
    assert not validators.validate_sugar("95mg").valid
    assert not validators.validate_sugar("９５").valid
    assert validators.validate_sugar("nope").message == "Sugar level must be a number between 20-600 mg/dL"


def test_heart_rate_range():
    assert validators.validate_heart_rate("30").valid
    assert validators.validate_heart_rate("220").valid
    assert not validators.validate_heart_rate("29").valid
    assert not validators.validate_heart_rate("221").valid
    assert not validators.validate_heart_rate(None).valid
    assert not validators.validate_heart_rate("٧٠").valid


def test_email_shape():
    assert validators.validate_email("a.b@example.co.uk").valid
    assert not validators.validate_email("no-at-sign.com").valid
    assert not validators.validate_email("two@@example.com").valid
    assert not validators.validate_email("a b@example.com").valid
    assert not validators.validate_email("user@localhost").valid


def test_email_length_is_bounded():
    assert validators.validate_email("a" * 242 + "@example.com").valid
    result = validators.validate_email("a" * 243 + "@example.com")
    assert not result.valid
    assert result.message == "Email cannot exceed 254 characters"


def test_password_reports_only_missing_symbol():
    assert validators.validate_password("Abcdefg1") == ["one special character (!@#$%^&*)"]


@pytest.mark.parametrize("password,missing", [
    ("abcdefg1!", "one uppercase letter"),
    ("ABCDEFG1!", "one lowercase letter"),
    ("Abcdefgh!", "one number"),
    ("Ab1!", "at least 8 characters"),
])
def test_password_reports_each_missing_class(password, missing):
    assert validators.validate_password(password) == [missing]


def test_password_reports_everything_at_once():
    assert validators.validate_password("") == [
        "at least 8 characters",
        "one uppercase letter",
        "one lowercase letter",
        "one number",
        "one special character (!@#$%^&*)",
    ]
    assert validators.validate_password("Str0ng!Pass") == []


def test_password_longer_than_bcrypt_accepts():
    assert validators.validate_password("Aa1!" + "x" * 80) == ["at most 72 bytes"]


def test_name_letters_and_spaces_only():
    assert validators.validate_name("  Jo Ann ").valid
    assert not validators.validate_name("J").valid
    assert not validators.validate_name("R2D2").valid
    assert not validators.validate_name("O'Brien").valid


def test_role_and_specialty():
    assert validators.validate_role("doctor").valid
    assert not validators.validate_role("admin").valid
    assert validators.validate_specialty("Cardiology").valid
    assert not validators.validate_specialty("C").valid
    assert not validators.validate_specialty("x" * 101).valid


@pytest.mark.parametrize("raw,expected", [
    ("  Jane  ", "Jane"),
    ("<script>alert(1)</script>Jane", "Jane"),
    ("<SCRIPT type='x'>a</SCRIPT>Bob<script>b</script>", "Bob"),
    ("Tom & \"Jerry\"", "Tom  Jerry"),
    ("it's <b>bold</b>", "its bbold/b"),
])
def test_sanitize(raw, expected):
    assert sanitize(raw) == expected


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    "plain text",
    " & leading ampersand",
    "trailing quote '",
    "<<script>>x</script>",
    "<scr<script>x</script>ipt>alert(1)</script>",
    "mixed \t<i>tabs</i>\n",
    "\"'<>&",
])
def test_sanitize_is_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


def test_sanitize_leaves_non_strings_alone():
    assert sanitize(None) is None
    assert sanitize(42) == 42
