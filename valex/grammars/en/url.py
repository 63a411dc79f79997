from typing import List

from ...dimensions.url import UrlData
from ...vx_pattern import rule
from ...vx_types import Rule


def _url(domain_group: int):
    def production(nodes):
        return UrlData(nodes[0].group(1), nodes[0].group(domain_group).lower())

    return production


def rules() -> List[Rule]:
    return [
        rule(
            "url",
            r"/((([a-zA-Z]+):\/\/)?(w{2,3}[0-9]*\.)?(([a-zA-Z0-9_-]+\.)+[a-z]{2,4})"
            r"(:\d+)?(\/[^?\s#]*)?(\?[^\s#]+)?(#[-,*=&a-zA-Z0-9]+)?)/",
            _url(5),
        ),
        rule(
            "localhost",
            r"/((([a-zA-Z]+):\/\/)?localhost(:\d+)?(\/[^?\s#]*)?(\?[^\s#]+)?)/",
            lambda nodes: UrlData(nodes[0].group(1), "localhost"),
        ),
        rule(
            "local url",
            r"/(([a-zA-Z]+):\/\/([a-zA-Z0-9_-]+)(:\d+)?(\/[^?\s#]*)?(\?[^\s#]+)?)/",
            _url(3),
        ),
    ]
