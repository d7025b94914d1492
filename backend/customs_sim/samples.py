"""
Sample export declarations for local runs and demos.

Each sample is the JSON shape the declaration form submits.
"""
import copy

BASE_DECLARATION = {
    "preEntryNo": "310120240000123456",
    "consignorConsignee": "宁波跨境优选贸易有限公司",
    "declarationUnit": "宁波跨境优选贸易有限公司",
    "exportPort": "北仑海关",
    "declareDate": "2024-05-20",
    "transportMode": "1",
    "transportName": "COSCO SHIPPING ARIES",
    "billNo": "COSU6312345670",
    "supervisionMode": "0110",
    "tradeCountry": "USA",
    "arrivalCountry": "USA",
    "originCountry": "CHN",
    "currency": "USD",
    "exchangeRate": 7.1,
    "totalAmountForeign": 12500.00,
    "packages": 250,
    "packageType": "纸箱",
    "grossWeight": 2600,
    "netWeight": 2400,
    "goods": [
        {
            "itemNo": 1,
            "goodsCode": "6109100021000",
            "goodsNameSpec": "棉制针织男式T恤 100%棉 圆领短袖",
            "quantity": 5000,
            "unit": "件",
            "unitPrice": 2.50,
            "totalPrice": 12500.00,
            "originCountry": "CHN",
            "finalDestCountry": "USA"
        }
    ],
    "inspectionQuarantine": False,
    "priceInfluenceFactor": False,
    "paymentSettlementUsage": False
}


def _variant(**changes) -> dict:
    data = copy.deepcopy(BASE_DECLARATION)
    goods = changes.pop("goods", None)
    data.update(changes)
    if goods is not None:
        data["goods"] = goods
    return data


SAMPLE_DECLARATIONS = {
    "basic": {
        "name": "Clean Apparel Export",
        "data": _variant(),
    },

    "weight_mismatch": {
        "name": "Gross Weight Below Net Weight",
        "data": _variant(grossWeight=5, netWeight=10),
    },

    "total_mismatch": {
        "name": "Declared Total Does Not Match Goods",
        "data": _variant(
            totalAmountForeign=100,
            goods=[{
                "itemNo": 1,
                "goodsCode": "6109100021000",
                "goodsNameSpec": "棉制针织男式T恤 100%棉 圆领短袖",
                "quantity": 10,
                "unit": "件",
                "unitPrice": 5.00,
                "totalPrice": 50.00
            }],
        ),
    },

    "short_hs_code": {
        "name": "Commodity Code Missing Leading Zeros",
        "data": _variant(goods=[{
            "itemNo": 1,
            "goodsCode": "123456789",
            "goodsNameSpec": "棉制针织男式T恤 100%棉 圆领短袖",
            "quantity": 5000,
            "unit": "件",
            "unitPrice": 2.50,
            "totalPrice": 12500.00
        }]),
    },

    "food_without_shelf_life": {
        "name": "Dairy Export Without Shelf Life",
        "data": _variant(
            totalAmountForeign=9000.00,
            goods=[{
                "itemNo": 1,
                "goodsCode": "0402210000000",
                "goodsNameSpec": "全脂奶粉 25kg/袋",
                "quantity": 300,
                "unit": "千克",
                "unitPrice": 30.00,
                "totalPrice": 9000.00
            }],
        ),
    },

    "incomplete": {
        "name": "Missing Export Port And Carrier",
        "data": _variant(exportPort="", transportName=None),
    },

    "low_value_general_trade": {
        "name": "Low Value General Trade Parcel",
        "data": _variant(
            totalAmountForeign=240.00,
            grossWeight=None,
            netWeight=None,
            goods=[{
                "itemNo": 1,
                "goodsCode": "8516310000000",
                "goodsNameSpec": "电吹风 功率1800W 电压220V",
                "quantity": 12,
                "unit": "台",
                "unitPrice": 20.00,
                "totalPrice": 240.00
            }],
        ),
    },

    "inconsistent": {
        "name": "Inconsistent Declaration",
        "data": _variant(
            transportMode="9",
            currency="RMB",
            exchangeRate=None,
            totalAmountForeign=15000.00,
            grossWeight=4000,
            netWeight=2000,
            goods=[
                {
                    "itemNo": 1,
                    "goodsCode": "8471300000",
                    "goodsNameSpec": "笔记本电脑",
                    "quantity": 20,
                    "unit": "台",
                    "unitPrice": 450.00,
                    "totalPrice": 9500.00
                },
                {
                    "itemNo": 2,
                    "goodsCode": "2815110000000",
                    "goodsNameSpec": "固体氢氧化钠",
                    "quantity": 100,
                    "unit": "千克",
                    "unitPrice": 0,
                    "totalPrice": 0
                }
            ],
        ),
    },
}
