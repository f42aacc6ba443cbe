import pytest
from simrank_core.validators import validate_vector, validate_batch, validate_slug
from simrank_core.errors import ValidationError

def test_validate_vector_valid():
    validate_vector([0.1, 0.2, 0.3])

def test_validate_vector_empty():
    with pytest.raises(ValidationError, match="Vector is empty"):
        validate_vector([])

def test_validate_vector_invalid_type():
    with pytest.raises(ValidationError, match="Vector must contain only numbers"):
        validate_vector([0.1, "string"])

def test_validate_batch_valid():
    validate_batch([[0.1], [0.2]])

def test_validate_batch_empty():
    with pytest.raises(ValidationError, match="Empty vector batch"):
        validate_batch([])

def test_validate_batch_mismatch():
    with pytest.raises(ValidationError, match="All vectors must have same dimension"):
        validate_batch([[0.1], [0.1, 0.2]])

def test_validate_slug_valid():
    assert validate_slug({"slug": "hello-world", "title": "Hi"}) == "hello-world"

@pytest.mark.parametrize(
    "frontmatter, message",
    [
        ({}, "no slug"),
        ({"slug": None}, "no slug"),
        ({"slug": ""}, "no slug"),
        ({"slug": 42}, "must be a string"),
        ({"slug": "   "}, "blank"),
    ],
)
def test_validate_slug_errors(frontmatter, message):
    with pytest.raises(ValidationError, match=message):
        validate_slug(frontmatter)
