from urllib.parse import quote

from services.host_bridge import HostBridge, SafeHost, TelegramLaunchBridge, extract_message_text


class TestExtractMessageText:

    def test_query_start_parameter(self):
        url = "https://app.example/?start=" + quote("Омлет из 3 яиц")
        assert extract_message_text(url) == "Омлет из 3 яиц"

    def test_fragment_start_parameter(self):
        url = "https://app.example/#tgWebAppData=x&start=" + quote("Борщ")
        assert extract_message_text(url) == "Борщ"

    def test_init_data_text(self):
        assert extract_message_text("https://app.example/", {"text": "Салат"}) == "Салат"

    def test_init_data_start_param(self):
        assert extract_message_text("", {"start_param": quote("Суп")}) == "Суп"

    def test_query_wins_over_init_data(self):
        url = "https://app.example/?start=" + quote("Омлет")
        assert extract_message_text(url, {"text": "Салат"}) == "Омлет"

    def test_nothing_to_extract(self):
        assert extract_message_text("https://app.example/?foo=bar", {"user": {"id": 1}}) is None


class TestTelegramLaunchBridge:

    def test_user_data(self):
        bridge = TelegramLaunchBridge(init_data={"user": {"id": 42}})
        assert bridge.get_user_data() == {"id": 42}
        assert TelegramLaunchBridge().get_user_data() is None

    def test_drain(self):
        bridge = TelegramLaunchBridge()
        bridge.show_alert("Рецепт сохранен!")
        bridge.vibrate()
        bridge.vibrate()
        assert bridge.drain() == (["Рецепт сохранен!"], 2)
        assert bridge.drain() == ([], 0)


class FailingHost:
    def show_alert(self, message):
        raise RuntimeError("WebApp is not ready")


class TestSafeHost:

    def test_no_host(self):
        host = SafeHost()
        host.show_alert("x")
        host.vibrate()
        assert host.get_forwarded_message_text() is None
        assert host.get_user_data() is None

    def test_failing_and_missing_capabilities(self):
        host = SafeHost(FailingHost())
        host.show_alert("x")
        host.vibrate()
        assert host.get_user_data() is None

    def test_null_bridge(self):
        host = SafeHost(HostBridge())
        assert host.get_forwarded_message_text() is None
