"""Static screen content: acknowledgement sections, advisor questions, option labels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class InfoSection:
    """A titled block with bullet points and a longer explanation."""

    id: str
    title: str
    bullets: tuple[str, ...]
    detail: str


IMPORTANT_SECTIONS: Final[tuple[InfoSection, ...]] = (
    InfoSection(
        id="eligibility",
        title="ご加入いただけない場合について",
        bullets=(
            "入院中・妊娠中・手術予定等の場合はお申込みいただけないことがあります",
            "直近の健康状態・通院状況により、引受を見合わせることがあります",
            "反社会的勢力との関係が判明した場合はお引受けできません",
        ),
        detail=(
            "現在入院中、医師の診察・検査・治療・投薬を受けている、または手術の予定がある等の場合は、"
            "ご加入いただけないことがあります。妊娠・出産に関する状況等も含め、当社所定の告知事項に"
            "該当する場合には、お引受けを見合わせることがあります。あらかじめご了承ください。"
        ),
    ),
    InfoSection(
        id="hospitalization",
        title="入院・手術・通院のご確認",
        bullets=(
            "最近3か月以内の入院・手術・検査の有無を確認します",
            "既往症や慢性疾患がある場合は、内容を正確にご申告ください",
            "告知内容により、保障の一部不担保や条件付き承諾となる場合があります",
        ),
        detail=(
            "申込時点における過去の入院・手術・通院・検査の有無、及び既往症の状況について確認します。"
            "記載内容に不備・虚偽がある場合、保険金・給付金をお支払いできないことがあります。"
        ),
    ),
    InfoSection(
        id="exclusions",
        title="免責・不担保事項",
        bullets=(
            "責任開始日前に発生した傷病は支払対象外となります",
            "特定の疾病や妊娠・出産等に関する給付はお支払い対象外となる場合があります",
            "約款に定める免責事由（故意・重大な過失等）に該当する場合は不担保です",
        ),
        detail=(
            "責任開始日前に発生した疾病・傷害、または約款に定める免責事由に該当する場合は、"
            "給付金の対象外です。詳細は重要事項説明書および約款をご確認ください。"
        ),
    ),
    InfoSection(
        id="privacy",
        title="個人情報の取り扱い",
        bullets=(
            "契約の引受判断・保険金支払・各種ご案内等の目的で利用します",
            "業務委託先等へ必要な範囲で提供することがあります",
            "法令に基づく場合を除き、ご本人の同意なく第三者へ提供しません",
        ),
        detail=(
            "当社は、取得した個人情報を、契約の引受判断、保険金・給付金のお支払い、アフターサービス、"
            "商品・サービスのご案内等の目的で利用します。取扱いの詳細は個人情報保護方針をご確認ください。"
        ),
    ),
    InfoSection(
        id="electronic",
        title="約款・重要事項の電子交付について",
        bullets=(
            "本サービスでは、約款・重要事項説明書等を電子的に交付します",
            "内容はPDFにて随時ご確認いただけます",
            "紙面での交付をご希望の場合は別途お手続きが必要です",
        ),
        detail=(
            "申込手続きに関する各種書面は電子交付（PDF）により提供します。通信環境により閲覧できない場合は、"
            "紙面交付への切替をサポートいたします。"
        ),
    ),
)

PRE_NOTICE_SECTIONS: Final[tuple[InfoSection, ...]] = (
    InfoSection(
        id="selfEntry",
        title="被保険者ご本人が入力してください",
        bullets=(
            "ご本人以外の入力は、申込のお取扱いができない場合があります",
            "正確な情報の申告が必要です",
        ),
        detail=(
            "告知内容は、被保険者ご本人の健康状態等に関する重要な情報です。必ずご本人が入力してください。"
            "代理入力や不正確な情報の記載があった場合、保険金・給付金をお支払いできないことがあります。"
        ),
    ),
    InfoSection(
        id="preparation",
        title="保険契約のお申込み前の準備物について、ご確認ください",
        bullets=(
            "健康診断結果票やお薬手帳など、最近の受診・服薬状況が分かる資料をご用意ください",
            "過去の入院・手術・通院歴が分かるメモ等があると入力がスムーズです",
        ),
        detail=(
            "入力にあたり、直近の健康診断結果や処方内容、通院履歴等の情報が必要となる場合があります。"
            "事前にお手元にご準備ください。"
        ),
    ),
    InfoSection(
        id="accuracy",
        title="正確な情報をご入力ください",
        bullets=(
            "虚偽や重大な記載漏れがあった場合、保険金・給付金をお支払いできないことがあります",
            "告知内容は申込の引受審査に使用します",
        ),
        detail=(
            "告知は約款で定める重要事項です。事実と異なる入力や重大な記載漏れがある場合、"
            "契約が解除となることや保険金・給付金をお支払いできないことがあります。"
        ),
    ),
    InfoSection(
        id="noticeHandling",
        title="告知整理について",
        bullets=(
            "入力いただいた内容は、お申込み手続きの中で当社所定の方法により確認します",
            "途中保存や再開の機能は、別途提供されるマイページからご利用いただけます",
        ),
        detail=(
            "本画面でご確認いただいた後の告知情報は、当社所定の仕組みにより審査・管理します。"
            "進行状況に応じて、後続の画面で内容を確認いただけます。"
        ),
    ),
    InfoSection(
        id="healthInfoUse",
        title="お客様の健康状態・傷病歴等に関する情報の取扱いについて",
        bullets=(
            "利用目的：引受審査、保険金・給付金の支払、アフターサービスの提供等",
            "法令に基づく場合を除き、ご本人の同意なく第三者へ提供しません",
        ),
        detail=(
            "取得した個人情報（健康情報を含む）は、契約の引受判断、保険金・給付金のお支払い、"
            "各種ご案内等の目的で利用します。詳細は当社の個人情報保護方針をご確認ください。"
        ),
    ),
)


@dataclass(frozen=True)
class AdvisorOption:
    id: str
    label: str


@dataclass(frozen=True)
class AdvisorQuestion:
    """One advisor question; ``multi`` questions accept several options."""

    id: str
    prompt: str
    options: tuple[AdvisorOption, ...]
    multi: bool
    info: str

    def label_for(self, option_id: str) -> str:
        for option in self.options:
            if option.id == option_id:
                return option.label
        return option_id


ADVISOR_QUESTIONS: Final[tuple[AdvisorQuestion, ...]] = (
    AdvisorQuestion(
        id="Q1",
        prompt="今、一番心配している医療リスクは何ですか？\n（あてはまるものをすべて）",
        options=(
            AdvisorOption("hosp_costs", "入院や手術でかかる費用"),
            AdvisorOption("cancer_long", "がんや重い病気の長期治療"),
            AdvisorOption("female_specific", "女性特有の病気やがん"),
            AdvisorOption("advanced_med", "先進医療の高額治療費"),
            AdvisorOption("income_drop", "生活費が減ること（働けない期間の収入減）"),
        ),
        multi=True,
        info="複数選択可能です",
    ),
    AdvisorQuestion(
        id="Q2",
        prompt="入院はどのくらいの期間まで\n備えたいと思いますか？",
        options=(
            AdvisorOption("short", "短期間（1〜2週間程度）で十分"),
            AdvisorOption("mid", "中期（1〜2か月程度）まで"),
            AdvisorOption("long", "長期（何か月も）にも備えたい"),
        ),
        multi=False,
        info="入院期間の保障について",
    ),
    AdvisorQuestion(
        id="Q3",
        prompt="入院中や治療中の生活費について、\nどちらの考えに近いですか？",
        options=(
            AdvisorOption("minimal", "最低限あればいい（節約してしのぐ）"),
            AdvisorOption("some_margin", "少し余裕を持ちたい（食事・交通・雑費など）"),
            AdvisorOption("keep_level", "普段と変わらない生活水準を維持したい"),
        ),
        multi=False,
        info="生活費の保障レベルについて",
    ),
    AdvisorQuestion(
        id="Q4",
        prompt="今後の保険料の支払いは、\nどちらを優先したいですか？",
        options=(
            AdvisorOption("light_monthly", "毎月の負担を軽くして続けやすくしたい"),
            AdvisorOption("finish_early", "働いているうちに払い終えて安心したい"),
        ),
        multi=False,
        info="保険料の支払い方針について",
    ),
    AdvisorQuestion(
        id="Q5",
        prompt="保険で優先したいのはどちらですか？",
        options=(
            AdvisorOption("broad", "幅広い病気やケガにまんべんなく備える"),
            AdvisorOption("focused", "特定のリスク（がん・特定疾病など）に手厚く備える"),
        ),
        multi=False,
        info="保障範囲の考え方について",
    ),
    AdvisorQuestion(
        id="Q6",
        prompt="保険に入る目的はどちらに近いですか？",
        options=(
            AdvisorOption("shock_absorb", "万一のときの経済的ショックを減らす"),
            AdvisorOption("build_ahead", "将来のために早めに備えを固める"),
        ),
        multi=False,
        info="保険の目的について",
    ),
)

DAILY_AMOUNT_OPTIONS: Final[tuple[int, ...]] = (3000, 4000, 5000, 6000, 7000, 8000, 9000, 10000)
PAYMENT_LIMIT_DAY_OPTIONS: Final[tuple[int, ...]] = (30, 60, 120)
UNLIMITED_TYPE_LABELS: Final[dict[str, str]] = {
    "none": "無制限なし",
    "3diseases": "3代疾病入院無制限",
    "8diseases": "8代疾病入院無制限",
}
SURGERY_TYPE_LABELS: Final[dict[str, str]] = {
    "surgery1": "手術Ⅰ型",
    "surgery2": "手術Ⅱ型",
    "surgery3": "手術Ⅲ型",
}
SURGERY_MULTIPLIER_OPTIONS: Final[tuple[int, ...]] = (10, 20, 60)
LIFETIME_PAYMENT_PERIOD: Final[int] = -1
PAYMENT_PERIOD_OPTIONS: Final[tuple[int, ...]] = (60, 65, 70, 75, 80, LIFETIME_PAYMENT_PERIOD)

RIDER_LABELS: Final[dict[str, str]] = {
    "hospitalizationRider": "入院一時給付特約",
    "womenDiseaseRider": "女性疾病入院一次給付特約",
    "womenMedicalRider": "女性医療特約",
    "womenCancerSupport": "女性がんサポート特約",
    "outpatientRider": "退院後通院特約",
    "advancedMedicalRider": "先進医療特約",
    "specificDiseaseRider": "特定疾病一時給付特約",
    "cancerRider": "がん一時給付特約",
    "anticancerRider": "抗がん剤治療特約",
    "disabilityRider": "障害・介護一時給付特約",
    "specificInjuryRider": "特定損傷特約",
    "premiumExemptionRider": "保険料払込免除特約",
}

DOCUMENT_TYPES: Final[dict[str, str]] = {
    "運転免許証": "運転免許証",
    "マイナンバーカード": "マイナンバーカード（個人番号カード）",
    "健康保険証": "健康保険証",
}


def payment_period_label(period: int) -> str:
    if period == LIFETIME_PAYMENT_PERIOD:
        return "終身払"
    return f"{period}歳払済"
