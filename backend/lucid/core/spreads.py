"""Spread Catalog — the named card layouts a reading can use.

Invariants:
    - Spread ids are unique; card_count == len(positions)
    - Position ids are 1-based and follow draw order
    - x/y are layout percentages (0-100) for the client to place cards
"""

from lucid.core.errors import UnknownSpreadError
from lucid.core.records import Spread, SpreadPosition

FREESTYLE_SPREAD_ID = "three_card_freestyle"
FOUR_ELEMENTS_SPREAD_ID = "four_elements"


def _spread(
    spread_id: str,
    name: str,
    description: str,
    positions: list[tuple[str, str, int, int]],
) -> Spread:
    return Spread(
        id=spread_id,
        name=name,
        description=description,
        card_count=len(positions),
        positions=[
            SpreadPosition(id=i, name=p_name, description=p_desc, x=x, y=y)
            for i, (p_name, p_desc, x, y) in enumerate(positions, start=1)
        ],
    )


SPREADS: tuple[Spread, ...] = (
    _spread(
        "inspiration_correspondence",
        "灵感对应",
        "连接表象与隐喻，寻找现实问题的灵性对应解法。",
        [
            ("表象", "现实中遇到的问题", 50, 80),
            ("隐喻", "潜意识的象征根源", 50, 20),
            ("连接", "整合转化的关键", 20, 50),
            ("启示", "灵性指引方向", 80, 50),
        ],
    ),
    _spread(
        "dream_decoder",
        "梦境解析",
        "解读梦境符号，链接潜意识讯息与清醒生活。",
        [
            ("梦境", "梦境的核心画面", 50, 20),
            ("讯息", "潜意识想要传达的", 25, 60),
            ("关联", "与现实生活的关联", 75, 60),
        ],
    ),
    _spread(
        "inner_compass",
        "内心指南针",
        "当感到迷茫时，重新校准内心的方向。",
        [
            ("北方", "理智与逻辑", 50, 20),
            ("南方", "激情与动力", 50, 80),
            ("东方", "新的启示", 80, 50),
            ("西方", "情感流动", 20, 50),
        ],
    ),
    _spread(
        "three_card_freestyle",
        "三张牌·自由解读",
        "无特定位置定义，依靠直觉读取三张牌的流动能量。",
        [
            ("牌一", "第一张牌", 20, 50),
            ("牌二", "第二张牌", 50, 50),
            ("牌三", "第三张牌", 80, 50),
        ],
    ),
    _spread(
        "three_card_time",
        "时间之流",
        "经典圣三角，解读过去、现在、未来的线性因果。",
        [
            ("过去", "过去的影响", 20, 50),
            ("现在", "当下的状态", 50, 50),
            ("未来", "未来的趋势", 80, 50),
        ],
    ),
    _spread(
        "four_elements",
        "四要素",
        "从火(行动)、水(情感)、风(思维)、土(物质)四个维度分析现状。",
        [
            ("火", "火：行动与热情", 50, 20),
            ("水", "水：情感与直觉", 80, 50),
            ("风", "风：思维与沟通", 20, 50),
            ("土", "土：物质与现实", 50, 80),
        ],
    ),
    _spread(
        "love_tree",
        "爱情之树",
        "深入分析关系现状、双方心境及未来走向。",
        [
            ("你", "你的状态", 20, 60),
            ("对方", "对方的状态", 80, 60),
            ("基础", "关系基础", 50, 80),
            ("阻碍", "挑战与阻碍", 50, 45),
            ("结果", "未来发展", 50, 20),
        ],
    ),
    _spread(
        "relationship_mirror",
        "关系镜面",
        "相互映射，看清对方眼中的你，以及你眼中的对方。",
        [
            ("你看对方", "你看对方", 25, 70),
            ("对方看你", "对方看你", 75, 70),
            ("你的需求", "你的真实需求", 25, 30),
            ("对方需求", "对方的真实需求", 75, 30),
        ],
    ),
    _spread(
        "ex_closure",
        "旧爱与和解",
        "分析分手原因、是否还有机会、以及如何疗愈。",
        [
            ("原因", "核心原因", 50, 80),
            ("你", "你的现状", 20, 50),
            ("对方", "对方现状", 80, 50),
            ("课题", "学到的课题", 50, 50),
            ("未来", "未来可能性", 50, 20),
        ],
    ),
    _spread(
        "choice",
        "二元选择",
        "面临两个选择（A或B）时，分析各自的发展趋势。",
        [
            ("现状", "当前处境", 50, 80),
            ("选择A", "选择A的过程", 25, 50),
            ("选择B", "选择B的过程", 75, 50),
            ("结果A", "选择A的结果", 25, 25),
            ("结果B", "选择B的结果", 75, 25),
        ],
    ),
    _spread(
        "career_star",
        "事业之星",
        "专注于职业发展、机遇与挑战的综合分析。",
        [
            ("现状", "职业现状", 50, 50),
            ("野心", "你的野心/目标", 50, 20),
            ("挑战", "面临的挑战", 80, 50),
            ("优势", "具备的优势", 20, 50),
            ("结果", "长期结果", 50, 80),
        ],
    ),
    _spread(
        "career_arrow",
        "事业之箭",
        "针对具体项目的执行策略与结果预测。",
        [
            ("目标", "目标", 50, 20),
            ("策略", "策略", 50, 40),
            ("隐因", "隐性因素", 50, 60),
            ("结果", "结果", 50, 80),
        ],
    ),
    _spread(
        "three_card_bms",
        "身心灵",
        "分析当下的身体状况、心智状态与灵性课题。",
        [
            ("身", "身体层面", 50, 80),
            ("心", "心智层面", 25, 40),
            ("灵", "灵性层面", 75, 40),
        ],
    ),
    _spread(
        "blind_spot",
        "盲点",
        "揭示你自己知道的、别人知道的、以及潜意识中谁都不知道的自己。",
        [
            ("公开自我", "公开的自我", 25, 25),
            ("隐藏自我", "隐藏的自我", 75, 25),
            ("盲点", "盲点的自我", 25, 75),
            ("未知", "未知的潜力", 75, 75),
        ],
    ),
    _spread(
        "chakra_7",
        "七脉轮",
        "从海底轮到顶轮，全方位扫描能量系统的堵塞与流动。",
        [
            ("海底轮", "海底轮 (生存)", 50, 90),
            ("本我轮", "本我轮 (创造)", 50, 78),
            ("太阳轮", "太阳轮 (意志)", 50, 66),
            ("心轮", "心轮 (爱)", 50, 54),
            ("喉轮", "喉轮 (表达)", 50, 42),
            ("眉心轮", "眉心轮 (直觉)", 50, 30),
            ("顶轮", "顶轮 (灵性)", 50, 18),
        ],
    ),
    _spread(
        "weekly_forecast",
        "本周运势",
        "针对接下来7天的能量概览、重点事件与建议。",
        [
            ("主题", "本周主题", 50, 20),
            ("挑战", "主要挑战", 25, 60),
            ("建议", "行动建议", 75, 60),
        ],
    ),
    _spread(
        "monthly_overview",
        "月度指引",
        "月初使用，规划一个月的重点方向。",
        [
            ("主题", "核心主题", 50, 20),
            ("情感", "情感运势", 20, 50),
            ("事业", "事业运势", 80, 50),
            ("健康", "健康建议", 50, 80),
        ],
    ),
    _spread(
        "birthday_return",
        "生日/太阳回归",
        "在生日当月使用，展望新一岁的成长课题。",
        [
            ("往昔", "过去一年的总结", 20, 50),
            ("主题", "新一岁的主题", 50, 20),
            ("礼物", "宇宙的礼物", 50, 50),
            ("挑战", "成长的挑战", 50, 80),
            ("建议", "核心建议", 80, 50),
        ],
    ),
    _spread(
        "celtic_cross",
        "凯尔特十字",
        "最经典的全面牌阵，用于深度解析复杂问题。",
        [
            ("核心", "核心现状", 38, 50),
            ("阻碍", "阻碍/挑战", 43, 55),
            ("潜意识", "潜意识/根源", 38, 72),
            ("过去", "过去的影响", 26, 50),
            ("显意识", "显意识/目标", 38, 28),
            ("未来", "即将发生", 50, 50),
            ("自我", "自我态度", 65, 72),
            ("环境", "环境影响", 65, 58),
            ("愿望恐惧", "希望与恐惧", 65, 44),
            ("结果", "最终结果", 65, 30),
        ],
    ),
    _spread(
        "horseshoe",
        "马蹄铁",
        "随着时间推移的发展过程，适合具体事件的演变。",
        [
            ("过去", "过去", 15, 20),
            ("现在", "现在", 15, 50),
            ("隐因", "隐因", 15, 80),
            ("阻碍", "阻碍", 50, 90),
            ("环境", "环境", 85, 80),
            ("建议", "建议", 85, 50),
            ("结果", "结果", 85, 20),
        ],
    ),
)

_BY_ID: dict[str, Spread] = {s.id: s for s in SPREADS}


def get_spread(spread_id: str) -> Spread:
    spread = _BY_ID.get(spread_id)
    if spread is None:
        raise UnknownSpreadError(spread_id)
    return spread


def list_spreads() -> list[Spread]:
    return list(SPREADS)
