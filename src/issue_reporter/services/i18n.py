"""Localized reply strings."""

import copy
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlsplit

from issue_reporter.domain.sessions import SessionRecord

LOCALE_PATHS = {
    "en": "/?lang=en",
    "th": "/?lang=th",
}

_CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "done_marker": "#done",
        "skip_marker": "#skip",
        "greeting": "Hi {name}! What would you like to do today?",
        "report_issue": "Report an issue",
        "contact_us": "Contact us",
        "switch_language": "Please say in Thai",
        "get_started": "Awesome, let's get started!",
        "ask_media": "First, can you send me photos or videos of the issue you found?",
        "contact_reply": (
            "You can leave us messages, "
            "and our staff will get back to you as soon as possible."
        ),
        "answer_first": "Slow down, could you please answer my question first?",
        "media_received": "(Y) Sweet!",
        "media_only": "Just photos or videos please. I'm getting confused! 😓",
        "media_skip_hint": (
            "If you really don't have photos or videos, you may skip this step."
        ),
        "ask_location": (
            "Next, can you help us locate the issue by sharing the location "
            "using Facebook Messenger App on your mobile phone? "
            "You can move the map around to pin the exact location "
            "or pick a place from the list."
        ),
        "location_received": "🚩 Ahh, got it.",
        "media_added_need_location": (
            "(Y) Cool! Don't forget to send me the location."
        ),
        "location_skip_hint": (
            "If you really can't input location, you may skip this step."
        ),
        "ask_location_detail": (
            "Any additional detail of the location, like floor or room number, "
            "would be great!"
        ),
        "location_detail_text_only": (
            "Please type the location detail, or skip this step."
        ),
        "thanks": "Great, thank you.",
        "ask_description": (
            "Alright, can you explain the issue you'd like to report today? "
            "Please make it as detailed as possible."
        ),
        "ask_categories": (
            "Could you please help me select appropriate categories for the issue? "
            "You can pick one from the list below or type #<category> "
            "for a custom category."
        ),
        "keep_typing": (
            "You can keep on typing! Send '#done' when you finish so that "
            "we can proceed to the next step."
        ),
        "done_yet": "Done? If not, don't worry, I'm still listening.",
        "media_added": "The photos/videos have been added.",
        "location_updated": "🚩 The location has been updated.",
        "not_understood": "Sorry, I didn't understand that.",
        "more_tags": "Anything else? You can keep adding more tags.",
        "submitted": (
            "Thank you very much, {name}. Your issue has been submitted. "
            "We will notify the team as soon as possible."
        ),
        "repair": "repair",
        "service": "service",
        "it": "IT",
        "suggestion": "suggestion",
        "classroom": "classroom",
        "safety": "safety",
        "sanitary": "sanitary",
        "traffic": "traffic",
        "others": "others",
    },
    "th": {
        "done_marker": "#เรียบร้อย",
        "skip_marker": "#ข้าม",
        "greeting": "สวัสดีค่ะคุณ {name} วันนี้ให้มะเฟืองช่วยอะไรดีคะ",
        "report_issue": "แจ้งปัญหา",
        "contact_us": "ติดต่อเจ้าหน้าที่",
        "switch_language": "Please speak English",
        "get_started": "เยี่ยมเลย เริ่มกันเลยค่ะ",
        "ask_media": "ขั้นแรก ช่วยส่งรูปหรือวิดีโอของปัญหาที่พบให้หน่อยนะคะ",
        "contact_reply": (
            "ฝากข้อความไว้ได้เลยค่ะ เจ้าหน้าที่จะติดต่อกลับโดยเร็วที่สุด"
        ),
        "answer_first": "ใจเย็น ๆ นะคะ ช่วยตอบคำถามของมะเฟืองก่อนได้ไหมคะ",
        "media_received": "(Y) เยี่ยมเลยค่ะ",
        "media_only": "ขอเป็นรูปหรือวิดีโอเท่านั้นนะคะ มะเฟืองงงแล้ว 😓",
        "media_skip_hint": "ถ้าไม่มีรูปหรือวิดีโอจริง ๆ ข้ามขั้นตอนนี้ได้ค่ะ",
        "ask_location": (
            "ต่อไป ช่วยบอกตำแหน่งของปัญหาโดยแชร์ตำแหน่งผ่านแอป Messenger "
            "บนมือถือได้ไหมคะ เลื่อนแผนที่เพื่อปักหมุดตำแหน่งที่แน่นอน "
            "หรือเลือกสถานที่จากรายการก็ได้ค่ะ"
        ),
        "location_received": "🚩 อ๋อ ได้แล้วค่ะ",
        "media_added_need_location": "(Y) ได้รับแล้วค่ะ อย่าลืมส่งตำแหน่งให้ด้วยนะคะ",
        "location_skip_hint": "ถ้าระบุตำแหน่งไม่ได้จริง ๆ ข้ามขั้นตอนนี้ได้ค่ะ",
        "ask_location_detail": (
            "ถ้ามีรายละเอียดตำแหน่งเพิ่มเติม เช่น ชั้นหรือเลขห้อง จะดีมากเลยค่ะ"
        ),
        "location_detail_text_only": (
            "พิมพ์รายละเอียดตำแหน่งได้เลยค่ะ หรือจะข้ามขั้นตอนนี้ก็ได้"
        ),
        "thanks": "ขอบคุณค่ะ",
        "ask_description": (
            "ช่วยอธิบายปัญหาที่ต้องการแจ้งหน่อยนะคะ ยิ่งละเอียดยิ่งดีค่ะ"
        ),
        "ask_categories": (
            "ช่วยเลือกหมวดหมู่ที่เหมาะกับปัญหานี้หน่อยนะคะ "
            "เลือกจากรายการด้านล่าง หรือพิมพ์ #<หมวดหมู่> เพื่อกำหนดเองก็ได้ค่ะ"
        ),
        "keep_typing": (
            "พิมพ์ต่อได้เลยค่ะ เสร็จแล้วส่ง '#เรียบร้อย' เพื่อไปขั้นตอนถัดไปนะคะ"
        ),
        "done_yet": "เรียบร้อยหรือยังคะ ถ้ายัง ไม่เป็นไรค่ะ มะเฟืองยังฟังอยู่",
        "media_added": "เพิ่มรูป/วิดีโอแล้วค่ะ",
        "location_updated": "🚩 อัปเดตตำแหน่งแล้วค่ะ",
        "not_understood": "ขอโทษค่ะ มะเฟืองไม่เข้าใจ",
        "more_tags": "มีอะไรเพิ่มเติมไหมคะ เพิ่มแท็กได้อีกเรื่อย ๆ ค่ะ",
        "submitted": (
            "ขอบคุณมากค่ะคุณ {name} เราได้รับเรื่องของคุณแล้ว "
            "และจะแจ้งทีมงานโดยเร็วที่สุดค่ะ"
        ),
        "repair": "ซ่อมแซม",
        "service": "บริการ",
        "it": "ไอที",
        "suggestion": "ข้อเสนอแนะ",
        "classroom": "ห้องเรียน",
        "safety": "ความปลอดภัย",
        "sanitary": "สุขอนามัย",
        "traffic": "จราจร",
        "others": "อื่นๆ",
    },
}


@dataclass
class Translator:
    """Lookup of reply strings by key and locale."""

    default_locale: str = "th"
    catalogs: dict[str, dict[str, str]] = field(
        default_factory=lambda: copy.deepcopy(_CATALOGS)
    )

    def translate(self, key: str, locale: str, **substitutions: object) -> str:
        """Return the string for key, falling back to the default locale."""
        catalog = self.catalogs.get(locale) or self.catalogs.get(
            self.default_locale, {}
        )
        template = catalog.get(key)
        if template is None:
            template = self.catalogs.get(self.default_locale, {}).get(key, key)
        if not substitutions:
            return template
        return template.format(**substitutions)

    def current_locale(self, session: SessionRecord) -> str:
        """Resolve the locale from the session's locale path."""
        if not session.locale_override:
            return self.default_locale
        query = parse_qs(urlsplit(session.locale_override).query)
        values = query.get("lang")
        if values and values[0] in self.catalogs:
            return values[0]
        return self.default_locale
