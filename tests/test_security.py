from app.core.security import create_backend_access_token, decode_backend_access_token, mask_card_number


def test_token_round_trip_keeps_role():
    token = create_backend_access_token("ops@example.com", role="Admin")

    payload = decode_backend_access_token(token)
    assert payload["sub"] == "ops@example.com"
    assert payload["role"] == "Admin"


def test_expired_or_garbage_tokens_are_rejected():
    expired = create_backend_access_token("ops@example.com", expires_minutes=-5)

    assert decode_backend_access_token(expired) is None
    assert decode_backend_access_token("not-a-jwt") is None


def test_mask_card_number():
    assert mask_card_number("4111111111111111") == "************1111"
    assert mask_card_number("1234") == "1234"
    assert mask_card_number("123") == "****"
    assert mask_card_number(None) == "****"
