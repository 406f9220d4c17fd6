"""
Aliyun Dyvms client. Places text-to-speech voice calls via SingleCallByTts.
"""

from __future__ import annotations

from client.models import Response
from client.params import Param
from client.pop import PopClient

VMS_ENDPOINT = "https://dyvmsapi.aliyuncs.com/"


def play_times(n: int) -> Param:
    """How many times the TTS message is played (1-3)."""
    return Param("PlayTimes", str(n))


def volume(n: int) -> Param:
    """Playback volume (0-100)."""
    return Param("Volume", str(n))


def speed(n: int) -> Param:
    """Speech rate (-500 to 500)."""
    return Param("Speed", str(n))


class VoiceClient(PopClient):
    """Voice call client. The response carries CallId instead of BizId."""

    ACTION = "SingleCallByTts"
    VERSION = "2017-05-25"

    def __init__(self, access_key_id: str, access_key_secret: str, endpoint: str = VMS_ENDPOINT, **kwargs) -> None:
        super().__init__(access_key_id, access_key_secret, endpoint, **kwargs)

    @staticmethod
    def tts_params(
        called_show_number: str,
        called_number: str,
        tts_code: str,
        tts_param: str = "",
    ) -> dict[str, str]:
        required = {
            "CalledShowNumber": called_show_number,
            "CalledNumber": called_number,
            "TtsCode": tts_code,
        }
        if tts_param:
            required["TtsParam"] = tts_param
        return required

    def single_call_by_tts(
        self,
        called_show_number: str,
        called_number: str,
        tts_code: str,
        *params: Param,
        tts_param: str = "",
    ) -> tuple[bool, Response]:
        """
        Call `called_number` and read out the TTS template `tts_code`.

        Args:
            called_show_number: Caller ID number purchased in the console
            called_number: Destination phone number
            tts_code: Approved TTS template ID, e.g. "TTS_10001"
            params: Optional overrides, e.g. play_times(2), volume(80)
            tts_param: Keyword-only JSON to render the template, omitted when empty
        """
        required = self.tts_params(called_show_number, called_number, tts_code, tts_param)
        return self.call(required, params)
