"""
Core: prefix-sum математика и domain модели.

Модуль не зависит от внешних систем (I/O, сеть, хранилища).
"""
