"""邮件内容规范化服务"""

import logging
import re
from typing import Optional

from domain.mail.services.mime_parser import MimeParser


_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# 只解码这几个实体，其余保持原样
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def strip_html(html: str) -> str:
    """
    极简的 HTML 转纯文本

    删除所有 <...> 标签（不插入空白），解码 &nbsp; &amp; &lt; &gt;，
    合并连续空白并去除首尾空白。
    """
    text = _TAG_RE.sub("", html)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return _WHITESPACE_RE.sub(" ", text).strip()


class MessageContentNormalizer:
    """
    邮件内容规范化服务

    把原始邮件字节转换为可供模式匹配的纯文本：
    1. 解析出纯文本正文则原样使用
    2. 否则使用去除标签后的 HTML 正文
    3. 解析失败（或两者都没有）时把原始字节当作文本

    该服务从不向外抛出异常。
    """

    def __init__(self, parser: MimeParser, logger: Optional[logging.Logger] = None):
        self._parser = parser
        self._logger = logger or logging.getLogger(__name__)

    def normalize(self, raw: bytes) -> str:
        """
        规范化原始邮件

        Args:
            raw: 原始邮件字节

        Returns:
            纯文本内容，最坏情况下为原始字节解码后的文本
        """
        try:
            content = self._parser.parse(raw)
        except Exception as e:
            self._logger.debug(f"MIME parse failed, falling back to raw source: {e}")
            return self._raw_text(raw)

        if content.has_text:
            return content.text  # type: ignore
        if content.has_html:
            return strip_html(content.html)  # type: ignore

        return self._raw_text(raw)

    @staticmethod
    def _raw_text(raw: bytes) -> str:
        return raw.decode("utf-8", errors="replace")
