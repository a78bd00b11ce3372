"""Shared fixtures: XML responses from the site and a controllable clock."""

from collections.abc import Callable, Iterable

import httpx
import pytest

from bggapi.services.http_client import HttpClientService

XML_HEADERS = {"Content-Type": "text/xml; charset=utf-8"}


THING_XML = """<?xml version="1.0" encoding="utf-8"?>
<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
    <item type="boardgame" id="161936">
        <thumbnail>//cf.geekdo-images.com/images/pic2452831_t.png</thumbnail>
        <image>//cf.geekdo-images.com/images/pic2452831.png</image>
        <name type="primary" sortindex="1" value="Pandemic Legacy: Season 1" />
        <name type="alternate" sortindex="1" value="Pandemic Legacy: Seizoen 1" />
        <description>Pandemic Legacy is a co-operative campaign game, with an overarching story-arc played through 12-24 sessions.</description>
        <yearpublished value="2015" />
        <minplayers value="2" />
        <maxplayers value="4" />
        <poll name="suggested_numplayers" title="User Suggested Number of Players" totalvotes="211">
            <results numplayers="1">
                <result value="Best" numvotes="0" />
                <result value="Recommended" numvotes="5" />
                <result value="Not Recommended" numvotes="121" />
            </results>
            <results numplayers="2">
                <result value="Best" numvotes="37" />
                <result value="Recommended" numvotes="116" />
                <result value="Not Recommended" numvotes="12" />
            </results>
            <results numplayers="3">
                <result value="Best" numvotes="49" />
                <result value="Recommended" numvotes="115" />
                <result value="Not Recommended" numvotes="6" />
            </results>
            <results numplayers="4">
                <result value="Best" numvotes="167" />
                <result value="Recommended" numvotes="29" />
                <result value="Not Recommended" numvotes="3" />
            </results>
            <results numplayers="4+">
                <result value="Best" numvotes="1" />
                <result value="Recommended" numvotes="5" />
                <result value="Not Recommended" numvotes="114" />
            </results>
        </poll>
        <playingtime value="60" />
        <minplaytime value="60" />
        <maxplaytime value="60" />
        <minage value="13" />
        <poll name="suggested_playerage" title="User Suggested Player Age" totalvotes="63">
            <results>
                <result value="8" numvotes="1" />
                <result value="10" numvotes="10" />
                <result value="12" numvotes="36" />
                <result value="14" numvotes="16" />
            </results>
        </poll>
        <poll name="language_dependence" title="Language Dependence" totalvotes="64">
            <results>
                <result level="1" value="No necessary in-game text" numvotes="0" />
                <result level="2" value="Some necessary text - easily memorized or small crib sheet" numvotes="0" />
                <result level="3" value="Moderate in-game text - needs crib sheet or paste ups" numvotes="1" />
                <result level="4" value="Extensive use of text - massive conversion needed to be playable" numvotes="51" />
                <result level="5" value="Unplayable in another language" numvotes="12" />
            </results>
        </poll>
        <link type="boardgamecategory" id="1084" value="Environmental" />
        <link type="boardgamecategory" id="2145" value="Medical" />
        <link type="boardgamemechanic" id="2001" value="Action Point Allowance System" />
        <link type="boardgamefamily" id="3430" value="Pandemic" />
        <link type="boardgameimplementation" id="30549" value="Pandemic" inbound="true" />
        <link type="boardgamedesigner" id="442" value="Rob Daviau" />
        <link type="boardgamedesigner" id="378" value="Matt Leacock" />
        <link type="boardgamepublisher" id="538" value="Z-Man Games" />
    </item>
</items>
"""

THING_STATS_XML = THING_XML.replace(
    "    </item>\n</items>",
    """        <statistics page="1">
            <ratings>
                <usersrated value="8969" />
                <average value="8.6419" />
                <bayesaverage value="8.3663" />
                <ranks>
                    <rank type="subtype" id="1" name="boardgame" friendlyname="Board Game Rank" value="1" bayesaverage="8.3663" />
                    <rank type="family" id="5496" name="thematic" friendlyname="Thematic Rank" value="1" bayesaverage="8.4309" />
                    <rank type="family" id="5497" name="strategygames" friendlyname="Strategy Game Rank" value="1" bayesaverage="8.3941" />
                </ranks>
                <stddev value="1.9607" />
                <median value="0" />
                <owned value="14392" />
                <trading value="31" />
                <wanting value="545" />
                <wishing value="4320" />
                <numcomments value="1641" />
                <numweights value="468" />
                <averageweight value="2.8034" />
            </ratings>
        </statistics>
    </item>
</items>""",
)

MADE_UP_GAME_XML = """<items>
    <item type="boardgame" id="123">
        <name type="primary" sortindex="3" value="A Made-Up Game" />
        <description></description>
        <yearpublished value="0" />
        <minplayers value="1" />
        <maxplayers value="5" />
        <poll name="suggested_numplayers" title="User Suggested Number of Players" totalvotes="0">
            <results numplayers="1+">
            </results>
        </poll>
        <playingtime value="0" />
        <minplaytime value="0" />
        <maxplaytime value="0" />
        <minage value="0" />
        <poll name="suggested_playerage" title="User Suggested Player Age" totalvotes="0">
        </poll>
        <poll name="language_dependence" title="Language Dependence" totalvotes="0">
        </poll>
        <statistics page="1">
            <ratings>
                <usersrated value="0" />
                <average value="0" />
                <bayesaverage value="0" />
                <ranks>
                    <rank type="subtype" id="1" name="boardgame" friendlyname="Board Game Rank" value="Not Ranked" bayesaverage="Not Ranked" />
                </ranks>
                <stddev value="0" />
                <median value="0" />
                <owned value="2" />
                <trading value="0" />
                <wanting value="0" />
                <wishing value="0" />
                <numcomments value="0" />
                <numweights value="0" />
                <averageweight value="0" />
            </ratings>
        </statistics>
    </item>
</items>
"""

THING_MULTIPLE_XML = """<items>
    <item type="boardgame" id="1">
        <name type="primary" sortindex="5" value="Die Macher" />
        <description>Die Macher is a game about seven sequential political races.</description>
        <yearpublished value="1986" />
        <minplayers value="3" />
        <maxplayers value="5" />
        <poll name="suggested_numplayers" totalvotes="0"></poll>
        <playingtime value="240" />
        <minplaytime value="240" />
        <maxplaytime value="240" />
        <minage value="14" />
        <poll name="suggested_playerage" totalvotes="0"></poll>
        <poll name="language_dependence" totalvotes="0"></poll>
    </item>
    <item type="boardgame" id="2">
        <name type="primary" sortindex="1" value="Dragonmaster" />
        <description>Dragonmaster is a trick-taking card game.</description>
        <yearpublished value="1981" />
        <minplayers value="3" />
        <maxplayers value="4" />
        <poll name="suggested_numplayers" totalvotes="0"></poll>
        <playingtime value="30" />
        <minplaytime value="30" />
        <maxplaytime value="30" />
        <minage value="12" />
        <poll name="suggested_playerage" totalvotes="0"></poll>
        <poll name="language_dependence" totalvotes="0"></poll>
    </item>
</items>
"""

EMPTY_ITEMS_XML = """<?xml version="1.0" encoding="utf-8"?>
<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
</items>
"""

DIV_ERROR_XML = """<div class='messagebox error'>
    error reading chunk of file
</div>
"""

ERRORS_XML = """<?xml version="1.0" encoding="utf-8" standalone="yes" ?>
<errors>
    <error>
        <message>Invalid username specified</message>
    </error>
</errors>
"""

UNPARSABLE_THING_XML = """<items>
    <item type="boardgame" id="34404">
        <name type="primary" sortindex="1" value="Broken" />
        <yearpublished value="not a year" />
    </item>
</items>
"""

COLLECTION_XML = """<?xml version="1.0" encoding="utf-8" standalone="yes"?>
<items totalitems="2" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse" pubdate="Mon, 18 Apr 2016 02:26:14 +0000">
    <item objecttype="thing" objectid="84876" subtype="boardgame" collid="29577003">
        <name sortindex="5">The Castles of Burgundy</name>
        <yearpublished>2011</yearpublished>
        <image>//cf.geekdo-images.com/images/pic1176894.jpg</image>
        <thumbnail>//cf.geekdo-images.com/images/pic1176894_t.jpg</thumbnail>
        <status own="1" prevowned="0" fortrade="0" want="0" wanttoplay="0" wanttobuy="0" wishlist="0" preordered="0" lastmodified="2016-04-04 20:19:37" />
        <numplays>6</numplays>
    </item>
    <item objecttype="thing" objectid="177590" subtype="boardgame" collid="29096777">
        <name sortindex="1">13 Days: The Cuban Missile Crisis</name>
        <yearpublished>2015</yearpublished>
        <status own="0" prevowned="0" fortrade="0" want="0" wanttoplay="1" wanttobuy="0" wishlist="1" wishlistpriority="3" preordered="0" lastmodified="2015-12-18 09:38:29" />
        <numplays>0</numplays>
        <wishlistcomment>Heard good things</wishlistcomment>
    </item>
</items>
"""

COLLECTION_STATS_XML = """<items totalitems="1">
    <item objecttype="thing" objectid="84876" subtype="boardgame" collid="29577003">
        <name sortindex="5">The Castles of Burgundy</name>
        <yearpublished>2011</yearpublished>
        <stats minplayers="2" maxplayers="4" minplaytime="30" maxplaytime="90" playingtime="90" numowned="42396">
            <rating value="8">
                <usersrated value="26512" />
                <average value="8.62655" />
                <bayesaverage value="8.3415" />
                <stddev value="1.18245" />
                <median value="0" />
                <ranks>
                    <rank type="subtype" id="1" name="boardgame" friendlyname="Board Game Rank" value="11" bayesaverage="8.3415" />
                    <rank type="family" id="5497" name="strategygames" friendlyname="Strategy Game Rank" value="8" bayesaverage="8.35567" />
                </ranks>
            </rating>
        </stats>
        <status own="1" prevowned="0" fortrade="0" want="0" wanttoplay="0" wanttobuy="0" wishlist="0" preordered="0" lastmodified="2016-04-04 20:19:37" />
        <numplays>6</numplays>
    </item>
</items>
"""

COLLECTION_BRIEF_STATS_XML = """<items totalitems="1">
    <item objecttype="thing" objectid="84876" subtype="boardgame" collid="29577003">
        <name sortindex="5">The Castles of Burgundy</name>
        <stats minplayers="2" maxplayers="4" minplaytime="30" maxplaytime="90" playingtime="90" numowned="42396">
            <rating value="N/A">
                <average value="8.62655" />
                <bayesaverage value="8.3415" />
            </rating>
        </stats>
        <status own="1" prevowned="0" fortrade="0" want="0" wanttoplay="0" wanttobuy="0" wishlist="0" preordered="0" lastmodified="2016-04-04 20:19:37" />
    </item>
</items>
"""

SEARCH_XML = """<?xml version="1.0" encoding="utf-8"?>
<items total="3" termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
    <item type="boardgame" id="84876">
        <name type="primary" value="The Castles of Burgundy" />
        <yearpublished value="2011" />
    </item>
    <item type="boardgame" id="191977">
        <name type="alternate" value="The Castles of Burgundy: The Card Game" />
        <yearpublished value="2016" />
    </item>
    <item type="boardgameexpansion" id="203102">
        <name type="primary" value="The Castles of Burgundy: Promo Tile" />
    </item>
</items>
"""


class FakeScheduler:
    """Scheduler whose clock only moves when something sleeps."""

    def __init__(self, start: float = 0.0) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.current += delay


def xml_response(body: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=body.encode("utf-8"), headers=XML_HEADERS)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that serves canned responses in order and records requests."""

    def __init__(self, responses: Iterable[httpx.Response] | Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        if callable(responses):
            handler = responses
        else:
            queue = list(responses)

            def handler(request: httpx.Request) -> httpx.Response:
                return queue.pop(0) if len(queue) > 1 else queue[0]

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def make_http_client() -> Callable[[RecordingTransport], HttpClientService]:
    def factory(transport: RecordingTransport) -> HttpClientService:
        return HttpClientService(timeout=5.0, transport=transport)
    return factory
