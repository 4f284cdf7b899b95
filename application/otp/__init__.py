"""OTP 检索应用层"""
