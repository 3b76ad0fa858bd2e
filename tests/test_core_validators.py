import pytest

from coursehub.core import validators
from coursehub.core.errors import ValidationError
from coursehub.core.models import Role


class TestValidateEmail:
    def test_returns_lowercased_email(self):
        assert validators.validate_email("  USER@Example.COM ") == "user@example.com"

    @pytest.mark.parametrize(
        "email",
        ["", "no-at-symbol", "user@", "@domain.com", "user@example", "a" * 255 + "@example.com", 42],
    )
    def test_invalid_email_formats(self, email):
        with pytest.raises(ValueError):
            validators.validate_email(email)


class TestValidateName:
    def test_valid_name_passes(self):
        assert validators.validate_name(" Alice ", "Name") == "Alice"

    @pytest.mark.parametrize(
        "name, message",
        [
            ("", "Name is required"),
            ("a" * 129, "Name exceeds maximum length"),
            ("Alice<script>", "Name contains invalid characters"),
        ],
    )
    def test_invalid_names(self, name, message):
        with pytest.raises(ValueError, match=message):
            validators.validate_name(name, "Name")


class TestValidatePrice:
    @pytest.mark.parametrize("price", [0, 19, 19.99])
    def test_accepts_non_negative_numbers(self, price):
        assert validators.validate_price(price) == float(price)

    @pytest.mark.parametrize("price", [-1, "10", True, None, float("nan"), float("inf"), float("-inf")])
    def test_rejects_others(self, price):
        with pytest.raises(ValueError):
            validators.validate_price(price)


class TestSignupSchema:
    def test_valid_payload(self):
        data = validators.validate_signup(
            {"email": "A@X.com", "password": "pw123456", "name": "A", "role": "INSTRUCTOR"}
        )
        assert data == {"email": "a@x.com", "password": "pw123456", "name": "A", "role": Role.INSTRUCTOR}

    def test_collects_all_errors(self):
        with pytest.raises(ValidationError) as excinfo:
            validators.validate_signup({"email": "bad", "password": "123", "role": "ADMIN"})
        errors = excinfo.value.errors
        assert any(error.startswith("email:") for error in errors)
        assert any(error.startswith("password:") for error in errors)
        assert "name: Required" in errors
        assert any(error.startswith("role:") for error in errors)
        assert excinfo.value.status_code == 400

    @pytest.mark.parametrize("payload", [None, [], "text", 12])
    def test_non_object_payload(self, payload):
        with pytest.raises(ValidationError, match="JSON object"):
            validators.validate_signup(payload)


class TestCourseSchemas:
    def test_create_requires_only_title(self):
        assert validators.validate_course_create({"title": " T "}) == {"title": "T"}

    def test_create_rejects_blank_title(self):
        with pytest.raises(ValidationError, match="title: Title is required"):
            validators.validate_course_create({"title": "   "})

    def test_update_is_partial(self):
        assert validators.validate_course_update({"price": 5}) == {"price": 5.0}
        assert validators.validate_course_update({}) == {}

    def test_update_null_clears_optional_fields(self):
        assert validators.validate_course_update({"description": None, "price": None}) == {
            "description": None,
            "price": None,
        }

    def test_update_rejects_null_title(self):
        with pytest.raises(ValidationError, match="title: Must not be null"):
            validators.validate_course_update({"title": None})

    def test_create_treats_null_as_absent(self):
        assert validators.validate_course_create({"title": "T", "price": None}) == {"title": "T"}

    def test_update_rejects_unknown_fields(self):
        with pytest.raises(ValidationError, match="instructorId: Unknown field"):
            validators.validate_course_update({"instructorId": "someone-else"})


class TestLessonAndPurchaseSchemas:
    def test_lesson_requires_course_id(self):
        with pytest.raises(ValidationError, match="courseId: Required"):
            validators.validate_lesson_create({"title": "L", "content": "body"})

    def test_lesson_allows_empty_content(self):
        data = validators.validate_lesson_create({"title": "L", "content": "", "courseId": "c1"})
        assert data == {"title": "L", "content": "", "courseId": "c1"}

    def test_purchase_requires_course_id(self):
        with pytest.raises(ValidationError):
            validators.validate_purchase_create({"courseId": ""})
