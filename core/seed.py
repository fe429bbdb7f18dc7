"""Demo data loaded into every freshly built store."""

from typing import Any, Dict, List

SEED_DATA: Dict[str, List[Dict[str, Any]]] = {
    "styles": [
        {
            "id": 1,
            "style_no": "ST2024-001",
            "style_name": "女士修身西装外套",
            "create_time": "2024-03-01",
            "public_note": "面料需预缩处理",
        },
        {
            "id": 2,
            "style_no": "ST2024-002",
            "style_name": "男士休闲衬衫",
            "create_time": "2024-03-12",
            "public_note": "",
        },
        {
            "id": 3,
            "style_no": "ST2024-003",
            "style_name": "儿童连帽卫衣",
            "create_time": "2024-04-02",
            "public_note": "拉链使用 YKK",
        },
    ],
    "variants": [
        {"id": 101, "style_id": 1, "color_name": "黑色", "size_range": "S-XL", "sample_image_url": ""},
        {"id": 102, "style_id": 1, "color_name": "米白色", "size_range": "S-L", "sample_image_url": ""},
        {"id": 103, "style_id": 2, "color_name": "天蓝色", "size_range": "M-XXL", "sample_image_url": ""},
        {"id": 104, "style_id": 3, "color_name": "灰色", "size_range": "110-150", "sample_image_url": ""},
    ],
    "bom_items": [
        {
            "id": 1001,
            "variant_id": 101,
            "material_name": "主面料-羊毛混纺",
            "material_image_url": "",
            "material_color_text": "黑色",
            "material_color_image_url": "",
            "usage": "大身",
            "unit": "米",
            "supplier": "华纺面料",
            "specDetails": [
                {"id": 5001, "size": "S", "spec_value": "1.5", "spec_unit": "米"},
                {"id": 5002, "size": "M", "spec_value": "1.6", "spec_unit": "米"},
                {"id": 5003, "size": "L", "spec_value": "1.7", "spec_unit": "米"},
            ],
        },
        {
            "id": 1002,
            "variant_id": 101,
            "material_name": "里布-涤纶",
            "material_image_url": "",
            "material_color_text": "黑色",
            "material_color_image_url": "",
            "usage": "里料",
            "unit": "米",
            "supplier": "恒力纺织",
            "specDetails": [
                {"id": 5004, "size": "均码", "spec_value": "1.2", "spec_unit": "米"},
            ],
        },
        {
            "id": 1003,
            "variant_id": 101,
            "material_name": "纽扣",
            "material_image_url": "",
            "material_color_text": "哑光黑",
            "material_color_image_url": "",
            "usage": "门襟",
            "unit": "粒",
            "supplier": "伟星辅料",
            "specDetails": [],
        },
        {
            "id": 1004,
            "variant_id": 102,
            "material_name": "主面料-羊毛混纺",
            "material_image_url": "",
            "material_color_text": "米白",
            "material_color_image_url": "",
            "usage": "大身",
            "unit": "米",
            "supplier": "华纺面料",
            "specDetails": [
                {"id": 5005, "size": "S", "spec_value": "1.5", "spec_unit": "米"},
                {"id": 5006, "size": "M", "spec_value": "1.6", "spec_unit": "米"},
            ],
        },
        {
            "id": 1005,
            "variant_id": 103,
            "material_name": "全棉牛津纺",
            "material_image_url": "",
            "material_color_text": "天蓝",
            "material_color_image_url": "",
            "usage": "大身",
            "unit": "米",
            "supplier": "鲁泰纺织",
            "specDetails": [
                {"id": 5007, "size": "M", "spec_value": "1.4", "spec_unit": "米"},
            ],
        },
        {
            "id": 1006,
            "variant_id": 104,
            "material_name": "树脂拉链",
            "material_image_url": "",
            "material_color_text": "灰色",
            "material_color_image_url": "",
            "usage": "前中",
            "unit": "条",
            "supplier": "YKK",
            "specDetails": [
                {"id": 5008, "size": "110", "spec_value": "40", "spec_unit": "cm"},
                {"id": 5009, "size": "130", "spec_value": "45", "spec_unit": "cm"},
            ],
        },
    ],
    "customers": [
        {"id": 201, "name": "优衣良品"},
        {"id": 202, "name": "森林童装"},
    ],
    "sizes": [
        {"id": 301, "name": "S"},
        {"id": 302, "name": "M"},
        {"id": 303, "name": "L"},
        {"id": 304, "name": "XL"},
        {"id": 305, "name": "均码"},
    ],
    "units": [
        {"id": 401, "name": "米"},
        {"id": 402, "name": "粒"},
        {"id": 403, "name": "条"},
        {"id": 404, "name": "cm"},
    ],
}


def iter_seed_ids(seed: Dict[str, List[Dict[str, Any]]]):
    """Yield every id in the seed, nested spec lines included."""
    for records in seed.values():
        for record in records:
            yield record["id"]
            for spec in record.get("specDetails") or []:
                if spec.get("id") is not None:
                    yield spec["id"]
