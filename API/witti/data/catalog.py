"""Seed content for the class catalog and the public insight cards."""

# (title, description, instructor_name, instructor_role, price, duration, icon, rating, student_count)
SEED_CLASSES: list[tuple[str, str, str, str, int, int, str, float, int]] = [
    ("AI로 부모면담 정리하기", "AI 도구로 부모면담 기록을 빠르게 정리하는 법", "김민지", "10년차 주임교사", 15000, 15, "🎓", 4.9, 1234),
    ("놀이일지 10분 완성법", "하루 놀이일지를 10분 안에 끝내는 실전 루틴", "박수진", "15년차 선임교사", 12000, 12, "📋", 4.8, 892),
    ("감정케어 & 회복 클래스", "지친 마음을 돌보는 교사를 위한 회복 수업", "이지은", "20년차 전문상담사", 18000, 20, "💬", 5.0, 567),
    ("부모님과의 첫 만남 준비", "첫 상담에서 신뢰를 쌓는 대화법", "김민지", "10년차 주임교사", 0, 5, "⚡", 4.7, 2300),
    ("아이 칭찬하는 효과적인 방법", "행동을 바꾸는 구체적인 칭찬 기술", "박수진", "15년차 선임교사", 0, 5, "⚡", 4.8, 1800),
    ("스트레스 해소 3가지 팁", "퇴근길 5분으로 하루를 정리하는 방법", "이지은", "20년차 전문상담사", 0, 5, "⚡", 4.9, 3100),
    ("AI로 부모면담 100% 활용하기", "현장 경험이 담긴 부모면담 실전 클래스", "김민지", "10년차 주임교사", 29000, 60, "👩", 4.9, 1234),
    ("놀이관찰 & 기록의 모든 것", "관찰부터 기록, 평가까지 한 번에", "박수진", "15년차 선임교사", 35000, 90, "👨", 5.0, 892),
    ("교사 마음케어 프로그램", "번아웃을 예방하는 교사 마음챙김 과정", "이지은", "20년차 전문상담사", 25000, 60, "💚", 5.0, 567),
    ("부모상담 실전 세미나", "사례로 배우는 부모상담 세미나", "김민지", "10년차 주임교사", 30000, 120, "📅", 4.8, 50),
]

INSIGHTS: list[dict] = [
    {
        "id": 1,
        "title": "오늘의 인사이트",
        "quote": "완벽한 수업보다 완벽한 관심이 학생들에게 더 큰 영향을 줍니다.",
        "message": "학생 한 명 한 명의 작은 변화를 알아차리는 것, 그것이 진짜 교육의 시작입니다.",
        "author": "― 교육 심리학자 김민정",
    },
    {
        "id": 2,
        "title": "마음을 채우는 한 마디",
        "quote": "가르침은 두 번의 학습이다.",
        "message": "가르치면서 우리도 함께 성장합니다. 오늘 하루도 학생들과 함께 배우는 시간이었습니다.",
        "author": "― 조셉 주베르",
    },
    {
        "id": 3,
        "title": "교사의 지혜",
        "quote": "학생들은 당신이 얼마나 아는지 상관하지 않습니다. 당신이 얼마나 관심을 가지는지를 알 때까지는.",
        "message": "오늘 하루, 한 명의 학생에게라도 진심 어린 관심을 보여주셨나요?",
        "author": "― 존 맥스웰",
    },
]
