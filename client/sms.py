"""
Aliyun Dysms client. Sends template SMS via the SendSms action.

API docs: https://help.aliyun.com/document_detail/101414.html
"""

from __future__ import annotations

from typing import Sequence

from client.models import Response
from client.params import Param, gen_phone_numbers_str
from client.pop import PopClient

SMS_ENDPOINT = "https://dysmsapi.aliyuncs.com/"


class SmsClient(PopClient):
    """
    SMS client. Reuse one instance for many sends.

    c = SmsClient(access_key_id, access_key_secret)
    ok, resp = c.send(["13800138000"], "my_product", "SMS_0000", '{"code":"1234"}')
    """

    ACTION = "SendSms"
    VERSION = "2017-05-25"

    def __init__(self, access_key_id: str, access_key_secret: str, endpoint: str = SMS_ENDPOINT, **kwargs) -> None:
        super().__init__(access_key_id, access_key_secret, endpoint, **kwargs)

    @staticmethod
    def sms_params(
        phone_numbers: Sequence[str],
        sign_name: str,
        template_code: str,
        template_param: str,
    ) -> dict[str, str]:
        """Required business fields for SendSms."""
        return {
            "PhoneNumbers": gen_phone_numbers_str(phone_numbers),
            "SignName": sign_name,
            "TemplateCode": template_code,
            "TemplateParam": template_param,
        }

    def send(
        self,
        phone_numbers: Sequence[str],
        sign_name: str,
        template_code: str,
        template_param: str,
        *params: Param,
    ) -> tuple[bool, Response]:
        """
        Send a template SMS to one or more phone numbers.

        Args:
            phone_numbers: Destination numbers. Aliyun recommends one number
                per send for verification codes.
            sign_name: Approved signature name
            template_code: Approved template code, e.g. "SMS_71390007"
            template_param: JSON to render the template, e.g. '{"code":"1234"}'
            params: Optional overrides, e.g. out_id("123"), region_id(...)

        Returns:
            (ok, response). ok is False when the service rejects the request.
        """
        required = self.sms_params(phone_numbers, sign_name, template_code, template_param)
        return self.call(required, params)
