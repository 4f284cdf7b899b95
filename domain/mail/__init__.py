"""邮件领域模块

该模块包含邮件收取和内容处理的领域模型，包括：
- FetchedMessage, EmailContent 值对象
- MailClient / MailSession 协议客户端接口
- MimeParser 解析接口
- MessageContentNormalizer 内容规范化服务
"""
