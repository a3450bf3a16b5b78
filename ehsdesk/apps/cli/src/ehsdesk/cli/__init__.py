"""EHS Desk 终端应用 -- 业务服务、角色会话与交互菜单"""
