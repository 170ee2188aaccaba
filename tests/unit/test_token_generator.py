import string

from tokenmail.services.token_generator import TOKEN_ALPHABET, generate_token


def test_default_token_is_eight_alphanumeric_chars():
    for _ in range(200):
        token = generate_token()
        assert len(token) == 8
        assert all(c in TOKEN_ALPHABET for c in token)


def test_alphabet_has_no_symbols():
    assert set(TOKEN_ALPHABET) == set(string.ascii_letters + string.digits)


def test_custom_length():
    assert len(generate_token(12)) == 12


def test_tokens_are_not_repeated():
    tokens = {generate_token() for _ in range(500)}
    # 62**8 possibilities; a collision here means the source isn't random
    assert len(tokens) == 500
