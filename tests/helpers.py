from svgcad.services.dxf_writer import DxfArc, DxfCircle, DxfLine

_KINDS = {"LINE": DxfLine, "ARC": DxfArc, "CIRCLE": DxfCircle}


def only(entities, kind):
    return [entity for entity in entities if isinstance(entity, _KINDS[kind])]


def group_pairs(dxf_text):
    lines = dxf_text.splitlines()
    return list(zip(lines[0::2], lines[1::2]))


def entity_types(dxf_text):
    pairs = group_pairs(dxf_text)
    start = pairs.index(("2", "ENTITIES"))
    types = []
    for code, value in pairs[start + 1:]:
        if (code, value) == ("0", "ENDSEC"):
            break
        if code == "0":
            types.append(value)
    return types
