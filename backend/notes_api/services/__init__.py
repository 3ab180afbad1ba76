# Services package init
"""
Notes API — Services Layer
============================

Service Inventory:
    - NoteService: the six note operations over the PersistenceGateway
    - KeywordProxyService: forwards keywords to the remote keyword function
"""
