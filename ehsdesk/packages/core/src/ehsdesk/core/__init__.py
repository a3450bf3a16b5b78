"""EHS Desk Core -- 领域模型、SQLite 持久化、配置与异常体系"""
