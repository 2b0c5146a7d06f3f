"""
Configuration settings for the Lead Fit & Attachment Matching Engine
"""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# =============================================================================
# LLM CONFIGURATION (keyword extraction provider)
# =============================================================================

LLM_CONFIG = {
    "provider": os.getenv("LLM_PROVIDER", "openrouter"),  # openrouter, openai, anthropic
    "model": os.getenv("LLM_MODEL", "openai/gpt-4o-mini"),  # OpenRouter model format
    "api_key": os.getenv("OPENROUTER_API_KEY", ""),
    "base_url": os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1"),
    "max_tokens": 300,
    "temperature": 0.2,
    "timeout_seconds": float(os.getenv("KEYWORD_EXTRACTION_TIMEOUT", "15")),
    # OpenRouter specific headers
    "site_url": os.getenv("OPENROUTER_SITE_URL", "http://localhost:8000"),
    "app_name": os.getenv("OPENROUTER_APP_NAME", "Lead Fit Engine"),
}

# =============================================================================
# DEFAULT SCORING WEIGHTS
# =============================================================================

DEFAULT_FIT_WEIGHTS = {
    "industry": 0.30,
    "location": 0.20,
    "company_size": 0.15,
    "engagement": 0.20,
    "ai_confidence": 0.15,
}

DEFAULT_SIMILARITY_WEIGHTS = {
    "industry_match": 0.30,
    "location_match": 0.20,
    "size_match": 0.15,
    "keyword_match": 0.20,
    "website_match": 0.15,
}

# =============================================================================
# DEFAULT LIMITS
# =============================================================================

DEFAULT_LIMITS = {
    "similarity_threshold": 0.3,
    "max_similar_results": 5,
    "max_llm_keywords": 20,
    "max_fallback_keywords": 10,
    "max_matches": 10,
    "max_basic_matches": 5,
}

# =============================================================================
# LEAD FIT TABLES
# =============================================================================

# Ordered smallest to largest; adjacency drives the company size sub-score.
COMPANY_SIZE_BUCKETS = ("1-10", "11-50", "51-200", "201-500", "500+")

# Suffixes accepted on a size bucket ("11-50人", "11-50 employees").
COMPANY_SIZE_SUFFIXES = ("人", "employees", "employee", "staff")

# A criteria industry matching any alias relates to every entry in "related".
INDUSTRY_RELATIONS = (
    {
        "aliases": ("科技", "technology", "tech"),
        "related": ("互联网", "internet", "软件", "software", "it", "人工智能", "ai",
                    "大数据", "big data"),
    },
    {
        "aliases": ("互联网", "internet"),
        "related": ("科技", "technology", "软件", "software", "电商",
                    "e-commerce", "移动应用", "mobile"),
    },
    {
        "aliases": ("金融", "finance", "financial"),
        "related": ("银行", "banking", "保险", "insurance", "投资", "investment",
                    "证券", "securities", "fintech"),
    },
    {
        "aliases": ("医疗", "healthcare", "medical"),
        "related": ("健康", "health", "制药", "pharma", "生物技术", "biotech",
                    "医疗器械", "medical devices"),
    },
    {
        "aliases": ("教育", "education"),
        "related": ("培训", "training", "在线教育", "e-learning", "学校", "school",
                    "教学", "edtech"),
    },
    {
        "aliases": ("制造", "manufacturing"),
        "related": ("工业", "industrial", "生产", "production", "制造业",
                    "机械", "machinery"),
    },
    {
        "aliases": ("零售", "retail"),
        "related": ("电商", "e-commerce", "销售", "sales", "商业", "commerce",
                    "购物", "shopping"),
    },
)

# Locations sharing a cluster count as the same region.
REGION_CLUSTERS = (
    ("北京", "beijing", "天津", "tianjin", "河北", "hebei"),
    ("上海", "shanghai", "江苏", "jiangsu", "浙江", "zhejiang"),
    ("广州", "guangzhou", "深圳", "shenzhen", "广东", "guangdong"),
    ("成都", "chengdu", "重庆", "chongqing", "四川", "sichuan"),
    ("西安", "xi'an", "xian", "陕西", "shaanxi"),
    ("武汉", "wuhan", "湖北", "hubei"),
    ("杭州", "hangzhou", "浙江", "zhejiang"),
    ("南京", "nanjing", "江苏", "jiangsu"),
)

# Fields counted by the data completeness ratio.
COMPLETENESS_FIELDS = (
    "company_name",
    "customer_email",
    "customer_website",
    "contact_person",
    "phone",
    "description",
    "industry",
    "location",
)

# =============================================================================
# KEYWORD EXTRACTION FALLBACK VOCABULARY
# =============================================================================

FALLBACK_KEYWORD_VOCABULARY = (
    "自动化", "效率", "管理", "系统", "平台", "解决方案", "服务", "产品",
    "技术", "开发", "设计", "营销", "销售", "客户", "数据", "分析",
    "云计算", "人工智能", "ai", "机器学习", "大数据", "区块链",
    "移动应用", "网站", "电商", "金融", "教育", "医疗", "制造",
    "automation", "efficiency", "management", "platform", "solution",
    "product", "marketing", "analytics", "cloud", "machine learning",
    "big data", "blockchain", "mobile app", "e-commerce",
)

# =============================================================================
# ATTACHMENT MATCHING RULES
# =============================================================================

# At most one bonus applies per material, first matching rule wins.
FILE_TYPE_RULES = (
    {
        "name": "pdf",
        "type_markers": ("pdf",),
        "terms": ("文档", "说明", "手册", "document", "manual", "spec", "guide"),
        "bonus": 1.0,
    },
    {
        "name": "image",
        "type_markers": ("image",),
        "terms": ("图片", "展示", "产品", "photo", "showcase", "product"),
        "bonus": 1.0,
    },
    {
        "name": "video",
        "type_markers": ("video",),
        "terms": ("演示", "视频", "介绍", "demo", "video", "intro"),
        "bonus": 1.0,
    },
    {
        "name": "spreadsheet",
        "type_markers": ("spreadsheet", "excel", "csv"),
        "terms": ("数据", "报表", "分析", "data", "report", "analysis"),
        "bonus": 1.0,
    },
)

# Reasons derived from the material's file name, in output order.
FILE_NAME_REASON_RULES = (
    {
        "reason": "Product introduction",
        "terms": ("产品", "介绍", "product", "introduction", "overview"),
    },
    {
        "reason": "Success story",
        "terms": ("案例", "成功", "case study", "success"),
    },
    {
        "reason": "Pricing information",
        "terms": ("价格", "报价", "定价", "pricing", "price", "quote", "quotation"),
    },
)

# =============================================================================
# RELEVANCE THRESHOLDS
# =============================================================================

RELEVANCE_THRESHOLDS = {
    "highly_relevant_above": 5,
    "moderately_relevant_above": 2,
    "high_confidence_score": 5,
    "high_confidence_keywords": 2,
    "medium_confidence_score": 2,
    "medium_confidence_keywords": 1,
}
