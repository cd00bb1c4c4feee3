import pytest

from email_api.domain.action_link import ActionLinkRecognizer

recognize = ActionLinkRecognizer(trusted_hosts=["firebaseapp.com", "web.app"])


@pytest.mark.parametrize(
    "url",
    [
        "https://idp/action?mode=verifyEmail&oobCode=abc",
        "https://auth.example.com/__/auth/action?oobCode=xyz",
        "https://example.com/finish?mode=verifyEmail",
        "https://drivecore-prod.firebaseapp.com/__/auth/action",
        "https://firebaseapp.com/anything",
        "https://drivecore.web.app/verify",
    ],
)
def test_recognizes_provider_action_links(url):
    assert recognize(url) is True


@pytest.mark.parametrize(
    "url",
    [
        None,
        "",
        "https://app.drivecore.test/verify",
        "https://app.drivecore.test/verify?mode=resetPassword",
        "https://notfirebaseapp.com/verify",
        "https://firebaseapp.com.evil.test/verify",
        "https://example.com/path/oobCode",
    ],
)
def test_plain_callbacks_are_not_action_links(url):
    assert recognize(url) is False


def test_hosts_are_matched_case_insensitively():
    r = ActionLinkRecognizer(trusted_hosts=["Auth.Example.COM"])
    assert r("https://AUTH.example.com/x")
    assert r("https://login.auth.example.com/x")


def test_custom_code_parameter():
    r = ActionLinkRecognizer(code_params=("code",))
    assert r("https://idp.test/cb?code=123")
    assert not r("https://idp.test/cb?oobCode=123")


def test_no_trusted_hosts_by_default():
    r = ActionLinkRecognizer()
    assert not r("https://drivecore.firebaseapp.com/verify")


@pytest.mark.parametrize(
    "url",
    [
        "https://idp.test/action?oobCode=",
        "https://idp.test/action?oobCode=%20",
        "https://idp.test/action?oobCode=&lang=en",
    ],
)
def test_blank_one_time_code_is_not_an_action_link(url):
    assert ActionLinkRecognizer()(url) is False
