"""OTP 提取领域服务"""

import re
from typing import Optional, Pattern, Sequence, Tuple


# 标签与数字之间允许的分隔：可选冒号（含全角）及空白
_SEPARATOR = r"\s*[:：]?\s*"
_DIGITS = r"(\d{4,8})(?!\d)"


def _labeled(label: str) -> Pattern[str]:
    return re.compile(label + _SEPARATOR + _DIGITS, re.IGNORECASE)


class OtpExtractor:
    """
    OTP 提取器

    根据参考码从规范化后的邮件文本中提取 OTP，规则按顺序尝试：

    1. 文本不包含参考码时直接返回 None
    2. 带标签的模式（"OTP code:"、"verification code:"、泰文 "รหัส OTP" 等），
       在全文范围内匹配，命中即返回
    3. 参考码首次出现位置前后 CONTEXT_RADIUS 个字符内，依次尝试
       6 位数字、4 位数字、5-8 位字母数字组合，跳过参考码本身
       以及年份、电话号码等常见误报
    """

    CONTEXT_RADIUS = 200

    LABELED_PATTERNS: Tuple[Pattern[str], ...] = (
        _labeled(r"รหัส\s*OTP"),
        _labeled(r"รหัสยืนยัน"),
        _labeled(r"\bOTP(?:\s*code)?"),
        _labeled(r"\bverification\s*code"),
        _labeled(r"\bone[-\s]?time\s*(?:password|passcode|code)"),
        _labeled(r"\bsecurity\s*code"),
        _labeled(r"\bpasscode"),
    )

    CONTEXT_SHAPES: Tuple[Pattern[str], ...] = (
        re.compile(r"\b\d{6}\b"),
        re.compile(r"\b\d{4}\b"),
        # 同时包含字母和数字
        re.compile(r"\b(?=[A-Z0-9]*[A-Z])(?=[A-Z0-9]*\d)[A-Z0-9]{5,8}\b"),
    )

    # 误报过滤：2020-2039 年份、以本地区号（0[2-9] 或 66）开头的数字、11 位以上的电话号码
    YEAR_PATTERN = re.compile(r"^20[23]\d$")
    AREA_CODE_PATTERN = re.compile(r"^(?:0[2-9]|66)\d+$")
    PHONE_PATTERN = re.compile(r"^\d{11,}$")

    def extract(self, text: str, reference_code: str) -> Optional[str]:
        """
        提取 OTP

        Args:
            text: 规范化后的邮件文本
            reference_code: 参考码

        Returns:
            OTP 字符串，未找到返回 None
        """
        if not reference_code or reference_code not in text:
            return None

        labeled = self._match_labeled(text)
        if labeled is not None:
            return labeled

        return self._match_in_context(text, reference_code)

    def _match_labeled(self, text: str) -> Optional[str]:
        for pattern in self.LABELED_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(1)
        return None

    def _match_in_context(self, text: str, reference_code: str) -> Optional[str]:
        index = text.find(reference_code)
        window = text[max(0, index - self.CONTEXT_RADIUS):index + self.CONTEXT_RADIUS]

        return self._first_candidate(window, reference_code, self.CONTEXT_SHAPES)

    def _first_candidate(
        self,
        window: str,
        reference_code: str,
        shapes: Sequence[Pattern[str]],
    ) -> Optional[str]:
        for shape in shapes:
            for match in shape.finditer(window):
                token = match.group(0)
                if token == reference_code or self.is_likely_false_positive(token):
                    continue
                return token
        return None

    def is_likely_false_positive(self, token: str) -> bool:
        """判断候选 token 是否像年份或电话号码"""
        return bool(
            self.YEAR_PATTERN.match(token)
            or self.AREA_CODE_PATTERN.match(token)
            or self.PHONE_PATTERN.match(token)
        )
